"""Renderers for the Clean View and the markup-preserving view."""

from __future__ import annotations

from editml.ast import Node
from editml.errors import EditMLError, Issue
from editml.resolve import DEFAULT_MAX_DEPTH, resolve_and_render


def render_clean_view(
    nodes: list[Node],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[str, list[Issue]]:
    """Render *nodes* as the document reads once all edits are applied.

    Additions and highlights keep their content, deletions and comments
    vanish, and move/copy blocks are placed at their targets. When the
    structure cannot be resolved the text is empty and the single returned
    issue is an error explaining why.
    """
    try:
        return resolve_and_render(nodes, max_depth=max_depth)
    except EditMLError as exc:
        return "", [exc.to_issue()]


def render_markup(nodes: list[Node]) -> str:
    """Re-emit every node in its original literal form."""
    return "".join(node.raw for node in nodes)
