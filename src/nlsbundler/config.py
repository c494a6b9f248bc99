"""Pipeline configuration.

Provides a single frozen dataclass holding every setting of the extraction
and resolution stages, loadable from a mapping or from the
``[tool.nlsbundler]`` table of a pyproject.toml.

Example pyproject.toml::

    [tool.nlsbundler]
    languages = ["deu", "fra", "jpn"]
    i18n-base-dir = "i18n"
    base-dir = "extensions/git"
    kvp = true

Python 3.12+.
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from nlsbundler.enums import Language
from nlsbundler.locale_utils import CORE_LANGUAGES, parse_language

__all__ = ["PipelineConfig"]

TOOL_TABLE = "nlsbundler"


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Immutable configuration for the extraction and resolution stages.

    Attributes:
        i18n_base_dir: Root of the per-language translation trees
        languages: Languages emitted by the resolution stage
        base_dir: Optional subdirectory inside each language tree
        kvp: Emit flat ``.i18n.json`` files next to the bundles

    Example:
        >>> config = PipelineConfig("i18n", languages=("deu", "fra"))
        >>> config.languages
        (<Language.DEU: 'deu'>, <Language.FRA: 'fra'>)
    """

    i18n_base_dir: str
    languages: tuple[Language, ...] = CORE_LANGUAGES
    base_dir: str | None = None
    kvp: bool = False

    def __post_init__(self) -> None:
        """Normalize languages and validate directories.

        Raises:
            UnknownLanguageError: If a language code is not supported
            ValueError: If i18n_base_dir is empty or languages repeat
        """
        if not self.i18n_base_dir:
            msg = "i18n_base_dir must not be empty"
            raise ValueError(msg)
        languages = tuple(parse_language(code) for code in self.languages)
        if len(set(languages)) != len(languages):
            msg = f"Duplicate language codes in {[str(code) for code in languages]}"
            raise ValueError(msg)
        object.__setattr__(self, "languages", languages)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PipelineConfig:
        """Build a configuration from a mapping.

        Keys may use dashes or underscores (``i18n-base-dir`` or
        ``i18n_base_dir``).

        Raises:
            KeyError: If i18n_base_dir is missing
            TypeError: If a value has the wrong type
            UnknownLanguageError: If a language code is not supported
        """
        normalized = {key.replace("-", "_"): value for key, value in data.items()}
        unknown = set(normalized) - {"i18n_base_dir", "languages", "base_dir", "kvp"}
        if unknown:
            msg = f"Unknown configuration keys: {sorted(unknown)}"
            raise TypeError(msg)

        base = normalized["i18n_base_dir"]
        if not isinstance(base, str):
            msg = f"i18n_base_dir must be a string, got {type(base).__name__}"
            raise TypeError(msg)

        languages: Iterable[str] = normalized.get("languages", CORE_LANGUAGES)
        if isinstance(languages, str) or not isinstance(languages, Iterable):
            msg = "languages must be a list of language codes"
            raise TypeError(msg)

        base_dir = normalized.get("base_dir")
        if base_dir is not None and not isinstance(base_dir, str):
            msg = f"base_dir must be a string, got {type(base_dir).__name__}"
            raise TypeError(msg)

        kvp = normalized.get("kvp", False)
        if not isinstance(kvp, bool):
            msg = f"kvp must be a boolean, got {type(kvp).__name__}"
            raise TypeError(msg)

        return cls(
            i18n_base_dir=base,
            languages=tuple(parse_language(code) for code in languages),
            base_dir=base_dir,
            kvp=kvp,
        )

    @classmethod
    def from_pyproject(cls, path: str | Path = "pyproject.toml") -> PipelineConfig:
        """Load the ``[tool.nlsbundler]`` table of a pyproject.toml.

        Raises:
            FileNotFoundError: If the file doesn't exist
            KeyError: If the table or i18n_base_dir is missing
            tomllib.TOMLDecodeError: If the file is not valid TOML
        """
        with Path(path).open("rb") as f:
            document = tomllib.load(f)
        try:
            table = document["tool"][TOOL_TABLE]
        except KeyError:
            msg = f"No [tool.{TOOL_TABLE}] table in {path}"
            raise KeyError(msg) from None
        return cls.from_mapping(table)
