"""Backslash escape decoding for captured markup content."""

from __future__ import annotations

from editml.ast import EditKind, Operation

# Resolved in every context.
_COMMON = frozenset("\\{}")

# The one extra escapable character per markup kind: the closing operator.
# Structural block content (move and copy alike) escapes its tilde.
_OPERATOR: dict[EditKind | Operation, str] = {
    EditKind.ADDITION: "+",
    EditKind.DELETION: "-",
    EditKind.COMMENT: "<",
    EditKind.HIGHLIGHT: "=",
    Operation.MOVE: "~",
    Operation.COPY: "~",
}


def escapable(context: EditKind | Operation) -> frozenset[str]:
    """Return the characters that may follow a backslash in *context*."""
    return _COMMON | {_OPERATOR[context]}


def decode(raw: str, context: EditKind | Operation) -> str:
    """Resolve escape sequences in *raw* for the given markup context.

    Single left-to-right pass: each backslash consumes at most the one
    character after it, so ``\\\\{`` decodes to ``\\{`` and not ``{``.
    Unrecognized sequences are kept verbatim.
    """
    value, _ = _decode(raw, context)
    return value


def unknown_escapes(raw: str, context: EditKind | Operation) -> list[tuple[int, str]]:
    """Return (offset, sequence) for each escape *decode* leaves untouched."""
    _, unknown = _decode(raw, context)
    return unknown


def _decode(raw: str, context: EditKind | Operation) -> tuple[str, list[tuple[int, str]]]:
    allowed = escapable(context)
    out: list[str] = []
    unknown: list[tuple[int, str]] = []
    i = 0
    n = len(raw)
    while i < n:
        ch = raw[i]
        if ch != "\\" or i + 1 >= n:
            out.append(ch)
            i += 1
            continue
        nxt = raw[i + 1]
        if nxt in allowed:
            out.append(nxt)
        else:
            unknown.append((i, raw[i : i + 2]))
            out.append(ch)
            out.append(nxt)
        i += 2
    return "".join(out), unknown
