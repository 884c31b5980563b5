"""Order candidate spans and interleave literal text."""

from __future__ import annotations

import logging

from editml.ast import Node, StructuralSource, Text
from editml.errors import Issue, Severity
from editml.scanner import Candidate
from editml.spans import LineIndex

logger = logging.getLogger(__name__)


def merge(
    candidates: list[Candidate],
    source: str,
    index: LineIndex | None = None,
) -> tuple[list[Node], list[Issue]]:
    """Build the document node sequence from possibly overlapping candidates.

    Candidates are taken in start order, the longer span first when two start
    at the same offset. A candidate starting inside an already accepted span
    is discarded and its characters stay part of that span's raw content.
    Discards are reported as warnings, except for markup lying wholly inside
    a structural block, which is re-parsed with the block later.
    """
    if index is None:
        index = LineIndex(source)

    ordered = sorted(candidates, key=lambda c: (c.start, -c.end))
    nodes: list[Node] = []
    issues: list[Issue] = []
    cursor = 0
    last: Candidate | None = None

    for cand in ordered:
        if cand.start < cursor:
            logger.debug(
                "discarding %s at offset %d, overlaps span ending at %d",
                cand.kind.name,
                cand.start,
                cursor,
            )
            if last is not None and isinstance(last.node, StructuralSource) and cand.end <= cursor:
                continue
            issues.append(
                Issue.at(
                    f"overlapping markup {cand.node.raw!r} ignored",
                    index.position(cand.start),
                    Severity.WARNING,
                )
            )
            continue

        if cand.start > cursor:
            nodes.append(Text(source[cursor : cand.start], index.span(cursor, cand.start)))
        nodes.append(cand.node)
        for offset, message in cand.warnings:
            issues.append(Issue.at(message, index.position(offset), Severity.WARNING))
        cursor = cand.end
        last = cand

    if cursor < len(source):
        nodes.append(Text(source[cursor:], index.span(cursor, len(source))))

    return nodes, issues
