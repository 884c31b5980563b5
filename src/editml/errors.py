"""Issue reporting and structural error types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from editml.spans import Position


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Issue:
    """A problem found while parsing or rendering.

    ``line`` and ``column`` are 1-based and best-effort; either may be None
    when the problem concerns the document as a whole.
    """

    message: str
    line: int | None = None
    column: int | None = None
    severity: Severity = Severity.WARNING

    @classmethod
    def at(cls, message: str, position: Position | None, severity: Severity) -> Issue:
        if position is None:
            return cls(message, None, None, severity)
        return cls(message, position.line, position.column, severity)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def format(self, source: str = "", filename: str = "input.editml") -> str:
        """Render the issue with a source excerpt and a caret under the column."""
        header = f"{self.severity.value}: {self.message}"
        if self.line is None:
            return header

        col = self.column or 1
        lines = source.split("\n")
        line_idx = self.line - 1

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)

        line_num = str(self.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"{header}\n"
            f"{' ' * gutter_width}--> {filename}:{self.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class EditMLError(Exception):
    """Base class for errors that abort rendering of a whole document."""

    def __init__(self, message: str, position: Position | None = None) -> None:
        self.message = message
        self.position = position
        super().__init__(message)

    def to_issue(self) -> Issue:
        return Issue.at(self.message, self.position, Severity.ERROR)


class StructuralConflict(EditMLError):
    """Source/target tags that cannot be resolved consistently."""


class DuplicateSourceTag(StructuralConflict):
    def __init__(self, tag: str, position: Position | None = None) -> None:
        self.tag = tag
        super().__init__(f"structural conflict: duplicate source tag {tag!r}", position)


class MultipleMoveTargets(StructuralConflict):
    def __init__(self, tag: str, position: Position | None = None) -> None:
        self.tag = tag
        super().__init__(f"structural conflict: multiple move targets for tag {tag!r}", position)


class StructuralNestingTooDeep(EditMLError):
    def __init__(self, max_depth: int, position: Position | None = None) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"structural blocks nested deeper than {max_depth} levels", position
        )
