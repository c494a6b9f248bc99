"""Extraction of localize() call sites from Python source.

The rewriter finds every ``localize(key, message, *args)`` call in a source
file, validates the literal key and default message, assigns each valid
call the next zero-based index and replaces the two arguments with
``<index>, None``. The extracted key/message pairs form the file's
MessageBundle; position ``i`` of the bundle belongs to the call rewritten
to index ``i``.

Accepted call shapes::

    localize("greeting.hello", "Hello, {0}!", name)
    nls.localize({"key": "ok", "comment": ["Button label"]}, "OK")

Rewritten::

    localize(0, None, name)
    nls.localize(1, None)

A no-argument ``load_message_bundle()`` call becomes
``load_message_bundle(__file__)``.

Python 3.12+. Zero external dependencies.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from nlsbundler.bundle import BareKey, CommentedKey, LocalizeKey, MessageBundle, key_of
from nlsbundler.constants import (
    COMMENT_FIELD,
    FILE_REFERENCE,
    KEY_FIELD,
    LOAD_BUNDLE_FUNCTIONS,
    LOCALIZE_FUNCTIONS,
    REWRITTEN_MESSAGE_LITERAL,
    SOURCE_BOM,
)
from nlsbundler.diagnostics import Diagnostic, ErrorTemplate, ValidationError
from nlsbundler.extraction.source import SourceIndex
from nlsbundler.sourcemap import PositionMap
from nlsbundler.text import TextEdit, apply_edits

__all__ = [
    "ProcessResult",
    "SourceRewriter",
    "process_file",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Outcome of rewriting one source file.

    When ``diagnostics`` is non-empty the file failed: ``contents``,
    ``position_map`` and ``bundle`` are all None and nothing may be
    emitted for it.

    Attributes:
        contents: Rewritten source text
        position_map: Position map following the rewrite (None if none was given)
        bundle: Extracted keys and messages, in index order
        diagnostics: Call-site errors, in source order
    """

    contents: str | None
    position_map: PositionMap | None
    bundle: MessageBundle | None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def errors(self) -> tuple[str, ...]:
        """Error messages prefixed with their "(line,column)" position."""
        return tuple(diagnostic.format_position() for diagnostic in self.diagnostics)

    @property
    def is_valid(self) -> bool:
        """Check if the file was rewritten without errors."""
        return not self.diagnostics

    def raise_for_errors(self) -> None:
        """Raise ValidationError if the file failed.

        Raises:
            ValidationError: Carrying the first diagnostic and all of them
        """
        if self.diagnostics:
            raise ValidationError(self.diagnostics[0], self.diagnostics)


def _call_name(func: ast.expr) -> str | None:
    """Function name of a call target: ``f`` or ``obj.f``."""
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _string_literal(node: ast.expr) -> str | None:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    return None


class _CallCollector(ast.NodeVisitor):
    """Collect localize() and load_message_bundle() calls."""

    def __init__(self, localize_functions: frozenset[str], load_functions: frozenset[str]) -> None:
        self._localize_functions = localize_functions
        self._load_functions = load_functions
        self.localize_calls: list[tuple[str, ast.Call]] = []
        self.load_calls: list[ast.Call] = []

    def visit_Call(self, node: ast.Call) -> None:
        name = _call_name(node.func)
        if name in self._localize_functions:
            self.localize_calls.append((name, node))
        elif name in self._load_functions and not node.args and not node.keywords:
            self.load_calls.append(node)
        self.generic_visit(node)


@dataclass(slots=True)
class _FileRewrite:
    """Mutable state of one file's rewrite."""

    index: SourceIndex
    edits: list[TextEdit]
    keys: list[LocalizeKey]
    messages: list[str]
    diagnostics: list[Diagnostic]


class SourceRewriter:
    """Rewrite localize() call sites to index references.

    Instances hold only the recognized call names and can be shared
    across files and threads.

    Args:
        localize_functions: Names matched as localize(key, message, ...)
        load_bundle_functions: Names whose empty calls receive ``__file__``

    Example:
        >>> result = SourceRewriter().process('localize("greeting.hello", "Hello, {0}!")\\n')
        >>> result.contents
        'localize(0, None)\\n'
        >>> result.bundle.to_dict()
        {'messages': ['Hello, {0}!'], 'keys': ['greeting.hello']}
    """

    __slots__ = ("_load_bundle_functions", "_localize_functions")

    def __init__(
        self,
        localize_functions: Iterable[str] = LOCALIZE_FUNCTIONS,
        load_bundle_functions: Iterable[str] = LOAD_BUNDLE_FUNCTIONS,
    ) -> None:
        self._localize_functions = frozenset(localize_functions)
        self._load_bundle_functions = frozenset(load_bundle_functions)

    def process(
        self,
        content: str,
        position_map: PositionMap | None = None,
        *,
        filename: str = "<source>",
    ) -> ProcessResult:
        """Rewrite one source file.

        Args:
            content: Source text; a leading BOM is kept in the output
            position_map: Map whose generated positions point into ``content``
            filename: Name used in parser errors and log messages

        Returns:
            ProcessResult; check ``diagnostics`` before using the output
        """
        index = SourceIndex(content)
        try:
            tree = ast.parse(content.removeprefix(SOURCE_BOM), filename=filename)
        except (SyntaxError, ValueError) as e:
            lineno = getattr(e, "lineno", None) or 1
            offset = getattr(e, "offset", None) or 1
            detail = getattr(e, "msg", None) or str(e)
            diagnostic = ErrorTemplate.source_syntax_error(detail, index.point(lineno, offset))
            logger.debug("Cannot parse %s: %s", filename, detail)
            return ProcessResult(None, None, None, (diagnostic,))

        collector = _CallCollector(self._localize_functions, self._load_bundle_functions)
        collector.visit(tree)

        state = _FileRewrite(index=index, edits=[], keys=[], messages=[], diagnostics=[])
        # NodeVisitor order follows field order, not text order.
        for name, call in sorted(collector.localize_calls, key=lambda item: index.span(item[1]).start):
            self._rewrite_localize_call(state, name, call)

        for call in collector.load_calls:
            closing = index.span(call).end - 1
            state.edits.append(TextEdit(closing, closing, FILE_REFERENCE))

        if state.diagnostics:
            logger.debug("%s: %d invalid localize() call(s)", filename, len(state.diagnostics))
            return ProcessResult(None, None, None, tuple(state.diagnostics))

        contents = apply_edits(content, state.edits) if state.edits else content
        new_map = None
        if position_map is not None:
            new_map = position_map.rewritten(content, contents, state.edits)

        bundle = MessageBundle(tuple(state.keys), tuple(state.messages))
        logger.info(
            "Rewrote %d localize() call(s) and %d bundle load(s) in %s",
            len(bundle),
            len(collector.load_calls),
            filename,
        )
        return ProcessResult(contents, new_map, bundle, ())

    def _rewrite_localize_call(self, state: _FileRewrite, name: str, call: ast.Call) -> None:
        """Validate one call site and queue its edits."""
        index = state.index
        leading = call.args[:2]
        starred = [arg for arg in leading if isinstance(arg, ast.Starred)]
        if starred:
            state.diagnostics.append(ErrorTemplate.localize_starred_argument(name, index.span(starred[0])))
            return
        if len(leading) < 2:
            state.diagnostics.append(
                ErrorTemplate.localize_missing_arguments(name, len(call.args), index.span(call))
            )
            return

        key_node, message_node = leading
        localize_key = self._parse_key(state, key_node)
        message = _string_literal(message_node)
        if message is None:
            state.diagnostics.append(ErrorTemplate.localize_message_invalid(index.span(message_node)))
        if localize_key is None or message is None:
            return

        position = len(state.keys)
        state.keys.append(localize_key)
        state.messages.append(message)
        state.edits.append(TextEdit(index.span(key_node).start, index.span(key_node).end, str(position)))
        state.edits.append(
            TextEdit(index.span(message_node).start, index.span(message_node).end, REWRITTEN_MESSAGE_LITERAL)
        )
        logger.debug("Call site %d at line %d: key %r", position, call.lineno, key_of(localize_key))

    def _parse_key(self, state: _FileRewrite, node: ast.expr) -> LocalizeKey | None:
        """Decode a key argument, recording diagnostics for malformed ones."""
        index = state.index
        literal = _string_literal(node)
        if literal is not None:
            if not literal:
                state.diagnostics.append(ErrorTemplate.localize_key_empty(index.span(node)))
                return None
            return BareKey(literal)

        if not isinstance(node, ast.Dict):
            state.diagnostics.append(ErrorTemplate.localize_key_invalid(index.span(node)))
            return None

        fields: dict[str, ast.expr] = {}
        for field_node, value in zip(node.keys, node.values, strict=True):
            field = _string_literal(field_node) if field_node is not None else None
            if field not in (KEY_FIELD, COMMENT_FIELD) or field in fields:
                state.diagnostics.append(ErrorTemplate.localize_key_invalid(index.span(node)))
                return None
            fields[field] = value

        key_node = fields.get(KEY_FIELD)
        key = _string_literal(key_node) if key_node is not None else None
        if key is None:
            state.diagnostics.append(ErrorTemplate.localize_key_invalid(index.span(node)))
            return None
        if not key:
            state.diagnostics.append(ErrorTemplate.localize_key_empty(index.span(key_node)))
            return None

        comment_node = fields.get(COMMENT_FIELD)
        if comment_node is None:
            return CommentedKey(key, ())
        comment = self._parse_comment(comment_node)
        if comment is None:
            state.diagnostics.append(ErrorTemplate.localize_comment_invalid(index.span(comment_node)))
            return None
        return CommentedKey(key, comment)

    @staticmethod
    def _parse_comment(node: ast.expr) -> tuple[str, ...] | None:
        single = _string_literal(node)
        if single is not None:
            return (single,)
        if isinstance(node, (ast.List, ast.Tuple)):
            lines = [_string_literal(element) for element in node.elts]
            if all(line is not None for line in lines):
                return tuple(line for line in lines if line is not None)
        return None


_DEFAULT_REWRITER = SourceRewriter()


def process_file(
    content: str,
    position_map: PositionMap | None = None,
    *,
    filename: str = "<source>",
) -> ProcessResult:
    """Rewrite one source file with the default call names.

    See SourceRewriter.process().
    """
    return _DEFAULT_REWRITER.process(content, position_map, filename=filename)
