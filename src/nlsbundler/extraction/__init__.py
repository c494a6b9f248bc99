"""Extraction of localize() call sites from Python source files.

Submodules:
    source   - SourceIndex (ast positions to character offsets)
    rewriter - SourceRewriter, ProcessResult, process_file

Python 3.12+. Zero external dependencies.
"""

from nlsbundler.extraction.rewriter import ProcessResult, SourceRewriter, process_file
from nlsbundler.extraction.source import SourceIndex

__all__ = [
    "ProcessResult",
    "SourceIndex",
    "SourceRewriter",
    "process_file",
]
