"""Matching engine — finds every candidate markup span in source text.

Each of the eight span kinds is searched independently over the whole text,
so candidates of different kinds may overlap. Ordering them and discarding
collisions is the job of :mod:`editml.overlap`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum, auto

from editml.ast import EditKind, InlineEdit, Node, Operation, StructuralSource, StructuralTarget
from editml.escapes import decode, unknown_escapes
from editml.spans import LineIndex

# Editor ids should be 1-5 characters; longer ones are accepted with a warning.
MAX_EDITOR_ID_LENGTH = 5


class SpanKind(Enum):
    ADDITION = auto()
    DELETION = auto()
    COMMENT = auto()
    HIGHLIGHT = auto()
    MOVE_SOURCE = auto()
    MOVE_TARGET = auto()
    COPY_SOURCE = auto()
    COPY_TARGET = auto()


@dataclass(frozen=True, slots=True)
class Candidate:
    """One matched span: [start, end) offsets plus the node built from it.

    ``warnings`` are (offset, message) pairs to report only if the candidate
    survives overlap resolution.
    """

    kind: SpanKind
    start: int
    end: int
    node: Node
    warnings: tuple[tuple[int, str], ...] = ()


# Content runs up to the first unescaped closing delimiter; a backslash always
# consumes the character after it, so an escaped delimiter never closes.
_CONTENT = r"((?:\\.|[^\\])*?)"
_ID = r"([A-Za-z0-9]+)"
_MOVE = r"(move|mv|m)"
_COPY = r"(copy|cp|c)"

_PATTERNS: dict[SpanKind, re.Pattern[str]] = {
    SpanKind.ADDITION: re.compile(r"\{\+" + _CONTENT + r"\+" + _ID + r"?\}", re.DOTALL),
    SpanKind.DELETION: re.compile(r"\{-" + _CONTENT + r"-" + _ID + r"?\}", re.DOTALL),
    SpanKind.COMMENT: re.compile(r"\{>" + _CONTENT + r"<" + _ID + r"?\}", re.DOTALL),
    SpanKind.HIGHLIGHT: re.compile(r"\{=" + _CONTENT + r"=" + _ID + r"?\}", re.DOTALL),
    SpanKind.MOVE_SOURCE: re.compile(
        r"\{" + _MOVE + "~" + _CONTENT + "~" + _ID + r"\}", re.DOTALL
    ),
    SpanKind.MOVE_TARGET: re.compile(r"\{" + _MOVE + ":" + _ID + r"\}"),
    SpanKind.COPY_SOURCE: re.compile(
        r"\{" + _COPY + "~" + _CONTENT + "~" + _ID + r"\}", re.DOTALL
    ),
    SpanKind.COPY_TARGET: re.compile(r"\{" + _COPY + ":" + _ID + r"\}"),
}

_INLINE_KINDS: dict[SpanKind, EditKind] = {
    SpanKind.ADDITION: EditKind.ADDITION,
    SpanKind.DELETION: EditKind.DELETION,
    SpanKind.COMMENT: EditKind.COMMENT,
    SpanKind.HIGHLIGHT: EditKind.HIGHLIGHT,
}


def find_all(source: str, index: LineIndex | None = None) -> list[Candidate]:
    """Return every unescaped markup span in *source*, in rule order.

    Candidates are not sorted and may overlap each other.
    """
    if index is None:
        index = LineIndex(source)
    candidates: list[Candidate] = []
    for kind, pattern in _PATTERNS.items():
        build = _BUILDERS[kind]
        for m in _iter_unescaped(pattern, source):
            candidates.append(build(kind, m, index))
    return candidates


def is_escaped(source: str, offset: int) -> bool:
    """Return True if the character at *offset* is preceded by an odd run of backslashes."""
    count = 0
    i = offset - 1
    while i >= 0 and source[i] == "\\":
        count += 1
        i -= 1
    return count % 2 == 1


def _iter_unescaped(pattern: re.Pattern[str], source: str) -> Iterator[re.Match[str]]:
    """Yield matches whose opening brace is not escaped.

    An escaped opening brace only rules out a match starting there; scanning
    resumes one character later so spans inside it are still found.
    """
    pos = 0
    while True:
        m = pattern.search(source, pos)
        if m is None:
            return
        if is_escaped(source, m.start()):
            pos = m.start() + 1
            continue
        yield m
        pos = m.end()


# ---------------------------------------------------------------------------
# Node builders
# ---------------------------------------------------------------------------


def _build_inline(kind: SpanKind, m: re.Match[str], index: LineIndex) -> Candidate:
    edit_kind = _INLINE_KINDS[kind]
    raw_content = m.group(1)
    editor_id = m.group(2)
    warnings = _escape_warnings(raw_content, m.start(1), edit_kind)
    if editor_id is not None and len(editor_id) > MAX_EDITOR_ID_LENGTH:
        warnings.append(
            (
                m.start(2),
                f"editor id {editor_id!r} is longer than {MAX_EDITOR_ID_LENGTH} characters",
            )
        )
    node = InlineEdit(
        edit_kind,
        decode(raw_content, edit_kind),
        editor_id,
        m.group(0),
        index.span(m.start(), m.end()),
    )
    return Candidate(kind, m.start(), m.end(), node, tuple(warnings))


def _build_source(kind: SpanKind, m: re.Match[str], index: LineIndex) -> Candidate:
    operation = Operation.MOVE if kind is SpanKind.MOVE_SOURCE else Operation.COPY
    # Escapes the block does not know may belong to inline markup inside it,
    # which is decoded (and checked) when the block is re-parsed.
    node = StructuralSource(
        operation,
        m.group(3),
        decode(m.group(2), operation),
        m.group(0),
        index.span(m.start(), m.end()),
    )
    return Candidate(kind, m.start(), m.end(), node)


def _build_target(kind: SpanKind, m: re.Match[str], index: LineIndex) -> Candidate:
    operation = Operation.MOVE if kind is SpanKind.MOVE_TARGET else Operation.COPY
    node = StructuralTarget(operation, m.group(2), m.group(0), index.span(m.start(), m.end()))
    return Candidate(kind, m.start(), m.end(), node)


def _escape_warnings(
    raw: str, base: int, context: EditKind | Operation
) -> list[tuple[int, str]]:
    return [
        (base + offset, f"unrecognized escape sequence {seq!r} kept verbatim")
        for offset, seq in unknown_escapes(raw, context)
    ]


_BUILDERS: dict[SpanKind, Callable[[SpanKind, re.Match[str], LineIndex], Candidate]] = {
    SpanKind.ADDITION: _build_inline,
    SpanKind.DELETION: _build_inline,
    SpanKind.COMMENT: _build_inline,
    SpanKind.HIGHLIGHT: _build_inline,
    SpanKind.MOVE_SOURCE: _build_source,
    SpanKind.MOVE_TARGET: _build_target,
    SpanKind.COPY_SOURCE: _build_source,
    SpanKind.COPY_TARGET: _build_target,
}
