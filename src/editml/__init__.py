"""EditML editorial markup parser and Clean View renderer."""

from __future__ import annotations

from editml.ast import Node
from editml.errors import Issue, Severity
from editml.parser import parse
from editml.render import render_clean_view, render_markup
from editml.resolve import DEFAULT_MAX_DEPTH

__version__ = "0.1.0"

__all__ = [
    "Issue",
    "Node",
    "Severity",
    "parse",
    "render_clean_view",
    "render_markup",
    "transform",
]


def transform(
    source: str,
    filename: str = "input.editml",
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    strip_comments: bool = True,
) -> tuple[str, list[Issue]]:
    """Parse EditML source and render its Clean View."""
    nodes, parse_issues = parse(source, filename, strip_comments=strip_comments)
    text, render_issues = render_clean_view(nodes, max_depth=max_depth)
    return text, parse_issues + render_issues
