"""Tests for config.py: PipelineConfig validation and loading.

Python 3.12+.
"""

from pathlib import Path

import pytest

from nlsbundler.config import PipelineConfig
from nlsbundler.diagnostics import UnknownLanguageError
from nlsbundler.enums import Language
from nlsbundler.locale_utils import CORE_LANGUAGES


class TestPipelineConfig:
    """Test construction and validation."""

    def test_defaults(self) -> None:
        """Languages default to the core list."""
        config = PipelineConfig("i18n")
        assert config.languages == CORE_LANGUAGES
        assert config.base_dir is None
        assert config.kvp is False

    def test_languages_normalized(self) -> None:
        """String codes become Language members."""
        assert PipelineConfig("i18n", languages=("deu", "fra")).languages == (Language.DEU, Language.FRA)

    def test_unknown_language(self) -> None:
        """Unknown codes raise UnknownLanguageError."""
        with pytest.raises(UnknownLanguageError):
            PipelineConfig("i18n", languages=("deu", "xxx"))

    def test_duplicate_languages(self) -> None:
        """Repeated codes are rejected."""
        with pytest.raises(ValueError, match="Duplicate"):
            PipelineConfig("i18n", languages=("deu", "deu"))

    def test_empty_base_rejected(self) -> None:
        """The i18n base directory is required."""
        with pytest.raises(ValueError, match="must not be empty"):
            PipelineConfig("")

    def test_frozen(self) -> None:
        """Configurations are immutable."""
        config = PipelineConfig("i18n")
        with pytest.raises(AttributeError):
            config.kvp = True  # type: ignore[misc]


class TestFromMapping:
    """Test PipelineConfig.from_mapping."""

    def test_dash_and_underscore_keys(self) -> None:
        """Both key spellings are accepted."""
        config = PipelineConfig.from_mapping(
            {"i18n-base-dir": "i18n", "base_dir": "ext/git", "languages": ["jpn"], "kvp": True}
        )
        assert config == PipelineConfig("i18n", (Language.JPN,), "ext/git", kvp=True)

    def test_unknown_key(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(TypeError, match="Unknown configuration keys"):
            PipelineConfig.from_mapping({"i18n_base_dir": "i18n", "langs": []})

    def test_missing_base(self) -> None:
        """i18n_base_dir is required."""
        with pytest.raises(KeyError):
            PipelineConfig.from_mapping({"kvp": True})

    @pytest.mark.parametrize(
        "data",
        [
            {"i18n_base_dir": 1},
            {"i18n_base_dir": "i18n", "languages": "deu"},
            {"i18n_base_dir": "i18n", "base_dir": 3},
            {"i18n_base_dir": "i18n", "kvp": "yes"},
        ],
    )
    def test_wrong_types(self, data: dict[str, object]) -> None:
        """Values of the wrong type raise TypeError."""
        with pytest.raises(TypeError):
            PipelineConfig.from_mapping(data)


class TestFromPyproject:
    """Test PipelineConfig.from_pyproject."""

    def test_reads_tool_table(self, tmp_path: Path) -> None:
        """The [tool.nlsbundler] table is loaded."""
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "app"\n\n[tool.nlsbundler]\n'
            'languages = ["deu", "ptb"]\ni18n-base-dir = "i18n"\nkvp = true\n',
            encoding="utf-8",
        )
        config = PipelineConfig.from_pyproject(path)
        assert config.languages == (Language.DEU, Language.PTB)
        assert config.i18n_base_dir == "i18n"
        assert config.kvp is True

    def test_missing_table(self, tmp_path: Path) -> None:
        """A pyproject.toml without the table raises KeyError."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "app"\n', encoding="utf-8")
        with pytest.raises(KeyError, match="tool.nlsbundler"):
            PipelineConfig.from_pyproject(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            PipelineConfig.from_pyproject(tmp_path / "nope.toml")
