"""--debug node and issue dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from editml.ast import InlineEdit, Node, StructuralSource, StructuralTarget, Text
from editml.errors import Issue

_MAX_TEXT = 50


def dump_nodes(nodes: list[Node], *, file: TextIO = sys.stderr) -> None:
    """Print one line per node to *file*."""
    if not nodes:
        file.write("(no nodes)\n")
        return
    for i, node in enumerate(nodes, start=1):
        file.write(f"{i:4d} {_describe(node)}\n")


def dump_issues(issues: list[Issue], *, file: TextIO = sys.stderr) -> None:
    """Print one line per issue to *file*."""
    if not issues:
        file.write("(no issues)\n")
        return
    for issue in issues:
        line = "?" if issue.line is None else issue.line
        col = "?" if issue.column is None else issue.column
        file.write(f"[{issue.severity.value}] L{line}:{col} {issue.message}\n")


def _describe(node: Node) -> str:
    loc = f"@{node.span.start.line}:{node.span.start.column}"
    if isinstance(node, Text):
        return f"Text {loc} {_truncate(node.value)!r}"
    if isinstance(node, InlineEdit):
        editor = f" editor={node.editor_id}" if node.editor_id else ""
        return f"InlineEdit {loc} {node.kind.value}{editor} {_truncate(node.content)!r}"
    if isinstance(node, StructuralSource):
        return (
            f"StructuralSource {loc} {node.operation.value} tag={node.tag} "
            f"{_truncate(node.block_content)!r}"
        )
    if isinstance(node, StructuralTarget):
        return f"StructuralTarget {loc} {node.operation.value} tag={node.tag}"
    return f"Unknown {type(node).__name__}"


def _truncate(text: str) -> str:
    if len(text) > _MAX_TEXT:
        return text[: _MAX_TEXT - 3] + "..."
    return text
