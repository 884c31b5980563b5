"""AST node types for parsed EditML documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from editml.spans import Span


class EditKind(Enum):
    """Inline (bbtext) edit kinds."""

    ADDITION = "addition"
    DELETION = "deletion"
    COMMENT = "comment"
    HIGHLIGHT = "highlight"


class Operation(Enum):
    """Structural (bbstructure) operations."""

    MOVE = "move"
    COPY = "copy"


@dataclass(frozen=True, slots=True)
class Text:
    """Literal run of source not covered by any markup."""

    value: str
    span: Span

    @property
    def raw(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class InlineEdit:
    """An addition, deletion, comment or highlight: {+...+id}, {-...-}, etc.

    ``content`` has already had its escapes resolved; ``raw`` is the exact
    source slice the edit was matched from.
    """

    kind: EditKind
    content: str
    editor_id: str | None
    raw: str
    span: Span


@dataclass(frozen=True, slots=True)
class StructuralSource:
    """A move/copy source block: {move~content~TAG} or {copy~content~TAG}.

    ``block_content`` is decoded text, not a nested AST. It may contain inline
    markup that the structural resolver re-parses on demand.
    """

    operation: Operation
    tag: str
    block_content: str
    raw: str
    span: Span


@dataclass(frozen=True, slots=True)
class StructuralTarget:
    """A move/copy target: {move:TAG} or {copy:TAG}."""

    operation: Operation
    tag: str
    raw: str
    span: Span


Node = Union[Text, InlineEdit, StructuralSource, StructuralTarget]
