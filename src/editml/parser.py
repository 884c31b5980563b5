"""EditML parser — converts source text into a flat node sequence."""

from __future__ import annotations

import logging

from editml.ast import Node
from editml.comments import strip_debug_comments_mapped
from editml.errors import Issue
from editml.overlap import merge
from editml.scanner import find_all
from editml.spans import LineIndex

logger = logging.getLogger(__name__)


def parse(
    source: str,
    filename: str = "input.editml",
    *,
    strip_comments: bool = True,
) -> tuple[list[Node], list[Issue]]:
    """Parse EditML source into nodes plus any recoverable issues.

    Never raises on malformed markup: text that matches no rule is kept as
    literal Text nodes. Line and column numbers in nodes and issues refer to
    *source* as given, even when debug-comment lines are stripped first.
    """
    line_numbers = None
    if strip_comments:
        source, line_numbers = strip_debug_comments_mapped(source)
    index = LineIndex(source, line_numbers)
    candidates = find_all(source, index)
    nodes, issues = merge(candidates, source, index)
    logger.debug(
        "%s: %d candidates, %d nodes, %d issues",
        filename,
        len(candidates),
        len(nodes),
        len(issues),
    )
    return nodes, issues
