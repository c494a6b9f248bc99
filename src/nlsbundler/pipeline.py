"""Build pipeline stages over streams of file records.

Two stages, each a lazy transformation of an iterable of FileRecord:

- rewrite_localize_calls: rewrite each source file and emit its bundle
  (and, in kvp mode, its flat translation object) right after it.
- create_additional_language_files: for each ``.nls.json`` bundle, emit one
  localized ``.nls.<tag>.json`` file per requested language, then the
  bundle itself. Every other record passes through untouched.

Files that fail are reported and dropped; they never stop the stream.
Reading files from disk and writing the emitted records back is left to
the caller.

Example:
    >>> records = [FileRecord("/build/src/app.py", "/build", source_bytes)]
    >>> config = PipelineConfig("i18n", languages=("deu",))
    >>> for record in run_pipeline(records, config):
    ...     print(record.relative)
    src/app.py
    src/app.nls.de.json
    src/app.nls.json

Python 3.12+.
"""

from __future__ import annotations

import json
import logging
import os.path
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace
from pathlib import PurePath
from typing import TypeAlias

from nlsbundler.bundle import MessageBundle, flat_to_json, flatten_bundle
from nlsbundler.config import PipelineConfig
from nlsbundler.constants import I18N_JSON, JSON_INDENT, NLS_JSON, NLS_LOCALIZED_TEMPLATE, SOURCE_ENCODING
from nlsbundler.diagnostics import (
    BundleFormatError,
    Diagnostic,
    DuplicateKeyError,
    ErrorTemplate,
    UnknownLanguageError,
)
from nlsbundler.enums import Language
from nlsbundler.extraction import SourceRewriter
from nlsbundler.locale_utils import CORE_LANGUAGES, parse_language, to_locale_tag
from nlsbundler.localization import BundleResolver, TranslationLoader
from nlsbundler.sourcemap import PositionMap

__all__ = [
    "FileRecord",
    "PipelineError",
    "create_additional_language_files",
    "rewrite_localize_calls",
    "run_pipeline",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One file flowing through the pipeline.

    Attributes:
        path: Full path of the file
        base: Build root the file is relative to
        contents: Raw file contents
        position_map: Position map whose generated side is ``contents``
    """

    path: str
    base: str
    contents: bytes
    position_map: PositionMap | None = None

    @property
    def relative(self) -> str:
        """Path relative to ``base``, with forward slashes."""
        return PurePath(os.path.relpath(self.path, self.base)).as_posix()

    @property
    def stem_path(self) -> str:
        """Path without its last extension."""
        return os.path.splitext(self.path)[0]

    def derive(self, suffix: str, text: str) -> FileRecord:
        """Sibling record sharing this record's stem, without position map."""
        return FileRecord(
            path=self.stem_path + suffix,
            base=self.base,
            contents=text.encode(SOURCE_ENCODING),
        )


@dataclass(frozen=True, slots=True)
class PipelineError:
    """A file dropped from the output.

    Attributes:
        path: Path of the failed file
        diagnostics: Why it failed, in source order
    """

    path: str
    diagnostics: tuple[Diagnostic, ...]

    @property
    def messages(self) -> tuple[str, ...]:
        """Diagnostics with their "(line,column)" positions."""
        return tuple(diagnostic.format_position() for diagnostic in self.diagnostics)


ErrorHandler: TypeAlias = Callable[[PipelineError], None]
ProblemHandler: TypeAlias = Callable[[Diagnostic], None]


def _log_error(error: PipelineError) -> None:
    for message in error.messages:
        logger.error("%s: %s", error.path, message)
    logger.error("Failed to rewrite file: %s", error.path)


def _log_problem(diagnostic: Diagnostic) -> None:
    if diagnostic.is_error:
        logger.error("%s", diagnostic.message)
    else:
        logger.warning("%s", diagnostic.message)


def rewrite_localize_calls(
    records: Iterable[FileRecord],
    *,
    kvp: bool = False,
    rewriter: SourceRewriter | None = None,
    on_error: ErrorHandler | None = None,
) -> Iterator[FileRecord]:
    """Rewrite source files and emit their bundles.

    Per input record, emits in order: the rewritten record, its
    ``.nls.json`` bundle and, when ``kvp`` is set, its ``.i18n.json`` flat
    object. Files without localize() calls get no bundle. A file with
    invalid call sites, duplicate keys (kvp mode) or contents that are not
    UTF-8 is reported through ``on_error`` and emits nothing.

    Args:
        records: Source file records
        kvp: Also emit the flat key/message object
        rewriter: Rewriter to use; defaults to the standard call names
        on_error: Called once per dropped file; defaults to logging

    Yields:
        Output records
    """
    rewriter = rewriter if rewriter is not None else SourceRewriter()
    report = on_error if on_error is not None else _log_error

    for record in records:
        try:
            text = record.contents.decode(SOURCE_ENCODING)
        except UnicodeDecodeError as e:
            report(PipelineError(record.path, (ErrorTemplate.source_decode_failed(record.relative, str(e)),)))
            continue

        result = rewriter.process(text, record.position_map, filename=record.relative)
        if not result.is_valid or result.contents is None or result.bundle is None:
            report(PipelineError(record.path, result.diagnostics))
            continue

        bundle = result.bundle
        derived: list[FileRecord] = []
        if len(bundle):
            derived.append(record.derive(NLS_JSON, bundle.to_json()))
            if kvp:
                try:
                    flat = flatten_bundle(bundle)
                except DuplicateKeyError as e:
                    diagnostic = e.diagnostic or ErrorTemplate.duplicate_key(e.key)
                    report(PipelineError(record.path, (diagnostic,)))
                    continue
                derived.append(record.derive(I18N_JSON, flat_to_json(flat)))

        yield replace(
            record,
            contents=result.contents.encode(SOURCE_ENCODING),
            position_map=result.position_map,
        )
        yield from derived


def _localized_json(messages: Iterable[str]) -> bytes:
    text = json.dumps(list(messages), indent=JSON_INDENT, ensure_ascii=False)
    return text.replace("\r\n", "\n").encode(SOURCE_ENCODING)


def create_additional_language_files(
    records: Iterable[FileRecord],
    languages: Iterable[Language | str] = CORE_LANGUAGES,
    i18n_base_dir: str = "",
    base_dir: str | None = None,
    *,
    loader: TranslationLoader | None = None,
    on_error: ErrorHandler | None = None,
    on_problem: ProblemHandler | None = None,
) -> Iterator[FileRecord]:
    """Emit localized bundles next to every ``.nls.json`` record.

    Unknown language codes are reported once through ``on_problem`` and
    skipped; the remaining languages still run. For each bundle and each
    language, in the given order, emits
    ``<base>/<name>.nls.<tag>.json`` unless the language has no translation
    source for it; the bundle record follows its localized files. Other
    records pass through unchanged. Malformed bundles are reported through
    ``on_error`` and dropped.

    Args:
        records: Records produced by rewrite_localize_calls (or reloaded bundles)
        languages: Internal language codes to emit
        i18n_base_dir: Root of the per-language translation trees
        base_dir: Optional subdirectory inside each language tree
        loader: Custom translation loader (``i18n_base_dir`` may then be empty)
        on_error: Called once per dropped bundle; defaults to logging
        on_problem: Called per resolution problem; defaults to logging

    Returns:
        Lazy iterator of output records

    Raises:
        ValueError: If neither i18n_base_dir nor loader is given
    """
    problem = on_problem if on_problem is not None else _log_problem
    targets: list[Language] = []
    rejected: set[str] = set()
    for code in languages:
        try:
            targets.append(parse_language(code))
        except UnknownLanguageError as e:
            if e.code in rejected:
                continue
            rejected.add(e.code)
            problem(e.diagnostic or ErrorTemplate.unknown_language(e.code, ()))
    resolver = BundleResolver(i18n_base_dir, base_dir, loader=loader)
    return _localize_records(
        records,
        tuple(targets),
        resolver,
        on_error if on_error is not None else _log_error,
        problem,
    )


def _localize_records(
    records: Iterable[FileRecord],
    languages: tuple[Language, ...],
    resolver: BundleResolver,
    report: ErrorHandler,
    problem: ProblemHandler,
) -> Iterator[FileRecord]:
    for record in records:
        relative = record.relative
        if not PurePath(relative).name.endswith(NLS_JSON):
            yield record
            continue

        filename = relative[: -len(NLS_JSON)]
        try:
            bundle = MessageBundle.from_json(record.contents)
        except BundleFormatError as e:
            diagnostic = e.diagnostic or ErrorTemplate.bundle_malformed(str(e), record.path)
            report(PipelineError(record.path, (diagnostic,)))
            continue

        for language in languages:
            result = resolver.resolve(filename, bundle, language)
            for diagnostic in result.diagnostics:
                problem(diagnostic)
            if result.messages is None:
                continue
            suffix = NLS_LOCALIZED_TEMPLATE.format(tag=to_locale_tag(language))
            yield FileRecord(
                path=os.path.join(record.base, filename) + suffix,
                base=record.base,
                contents=_localized_json(result.messages),
            )
        yield record


def run_pipeline(
    records: Iterable[FileRecord],
    config: PipelineConfig,
    *,
    loader: TranslationLoader | None = None,
    on_error: ErrorHandler | None = None,
    on_problem: ProblemHandler | None = None,
) -> Iterator[FileRecord]:
    """Chain both stages as configured.

    Args:
        records: Source file records
        config: Pipeline configuration
        loader: Custom translation loader
        on_error: Called once per dropped file
        on_problem: Called per resolution problem

    Returns:
        Lazy iterator of output records
    """
    rewritten = rewrite_localize_calls(records, kvp=config.kvp, on_error=on_error)
    return create_additional_language_files(
        rewritten,
        config.languages,
        config.i18n_base_dir,
        config.base_dir,
        loader=loader,
        on_error=on_error,
        on_problem=on_problem,
    )
