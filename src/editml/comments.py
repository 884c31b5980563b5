"""Debug-comment stripping applied before markup matching."""

from __future__ import annotations


def strip_debug_comments(source: str) -> str:
    """Remove ``%%`` line comments from *source*.

    A line is a comment when it starts with ``%%`` followed by end of line,
    whitespace, or any character that is neither a letter nor a decimal
    digit. ``%%VERSION`` is literal text. Line endings are normalised to
    ``\\n``; a trailing newline is kept.
    """
    return strip_debug_comments_mapped(source)[0]


def strip_debug_comments_mapped(source: str) -> tuple[str, list[int]]:
    """Like :func:`strip_debug_comments`, also returning the 1-based line
    number in *source* of every line that was kept.
    """
    if not source:
        return source, []

    lines = source.replace("\r\n", "\n").split("\n")
    trailing_newline = lines[-1] == ""
    if trailing_newline:
        lines = lines[:-1]

    kept: list[str] = []
    line_numbers: list[int] = []
    for lineno, line in enumerate(lines, start=1):
        if not _is_comment_line(line):
            kept.append(line)
            line_numbers.append(lineno)

    result = "\n".join(kept)
    if trailing_newline and kept:
        result += "\n"
    return result, line_numbers


def _is_comment_line(line: str) -> bool:
    if not line.startswith("%%"):
        return False
    if len(line) == 2:
        return True
    ch = line[2]
    return not (ch.isalpha() or ch.isdecimal())
