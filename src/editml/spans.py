"""Source positions and offset-to-line/column mapping."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset.

    The offset always indexes the parsed text; the line may be translated
    back to the input when whole lines were removed before parsing.
    """

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


class LineIndex:
    """Map character offsets in a source string to line/column positions.

    ``line_numbers`` gives the input line number of each line of *source*,
    for text that had lines removed (see
    :func:`editml.comments.strip_debug_comments_mapped`).
    """

    def __init__(self, source: str, line_numbers: list[int] | None = None) -> None:
        self._starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self._starts.append(i + 1)
        self._line_numbers = line_numbers

    def position(self, offset: int) -> Position:
        line_idx = bisect_right(self._starts, offset) - 1
        column = offset - self._starts[line_idx] + 1
        return Position(self._input_line(line_idx), column, offset)

    def span(self, start: int, end: int) -> Span:
        return Span(self.position(start), self.position(end))

    def _input_line(self, line_idx: int) -> int:
        numbers = self._line_numbers
        if numbers is None:
            return line_idx + 1
        if line_idx < len(numbers):
            return numbers[line_idx]
        # Past the last kept line, e.g. the end of text with a trailing newline.
        last = numbers[-1] if numbers else 0
        return last + line_idx - len(numbers) + 1
