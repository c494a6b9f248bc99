"""nlsbundler - message bundle extraction and resolution for Python sources.

Finds ``localize(key, message, ...)`` call sites in Python source files,
moves their keys and default messages into ``.nls.json`` bundles, rewrites
each call to refer to its message by index, and later resolves the bundles
against per-language ``.i18n.json`` translation trees.

Public API:
    SourceRewriter - Rewrite one source file and extract its bundle
    MessageBundle - Keys and default messages of one source file
    BundleResolver - Resolve bundles against a translation tree
    PipelineConfig - Settings of the build pipeline
    FileRecord - One file flowing through the pipeline
    rewrite_localize_calls - Pipeline stage: sources to rewritten sources and bundles
    create_additional_language_files - Pipeline stage: bundles to localized bundles
    run_pipeline - Both stages chained

Exceptions:
    NlsError - Base exception class
    ValidationError - Invalid localize() call sites
    DuplicateKeyError - Repeated key while flattening a bundle
    BundleFormatError - Malformed bundle artifact
    UnknownLanguageError - Unsupported internal language code
    PositionMapError - Malformed position map

Submodules:
    nlsbundler.extraction - Call site discovery and source rewriting
    nlsbundler.bundle - Bundle model and flattening
    nlsbundler.sourcemap - Position maps and the VLQ codec
    nlsbundler.localization - Translation loaders and bundle resolution
    nlsbundler.diagnostics - Diagnostic codes, templates and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .bundle import MessageBundle
from .config import PipelineConfig
from .diagnostics import (
    BundleFormatError,
    DuplicateKeyError,
    NlsError,
    PositionMapError,
    UnknownLanguageError,
    ValidationError,
)
from .enums import Language
from .extraction import SourceRewriter
from .locale_utils import CORE_LANGUAGES, to_locale_tag
from .localization import BundleResolver
from .pipeline import (
    FileRecord,
    PipelineError,
    create_additional_language_files,
    rewrite_localize_calls,
    run_pipeline,
)

# Version information - Auto-populated from package metadata
try:
    __version__ = _get_version("nlsbundler")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CORE_LANGUAGES",
    "BundleFormatError",
    "BundleResolver",
    "DuplicateKeyError",
    "FileRecord",
    "Language",
    "MessageBundle",
    "NlsError",
    "PipelineConfig",
    "PipelineError",
    "PositionMapError",
    "SourceRewriter",
    "UnknownLanguageError",
    "ValidationError",
    "__version__",
    "create_additional_language_files",
    "rewrite_localize_calls",
    "run_pipeline",
    "to_locale_tag",
]
