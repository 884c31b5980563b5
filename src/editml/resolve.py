"""Validate move/copy tags and render the Clean View.

Resolution runs in two passes over a node sequence:

1. Index: collect every source (rendering its block content through the whole
   pipeline) and every target, failing on duplicate source tags or on a
   second move target for the same tag.
2. Render: walk the nodes left to right, applying inline edits and placing
   each structural block according to the index.

Duplicate source tags, multiple move targets and excessive block nesting
abort the whole document. Unresolved tags, operation mismatches and blocks
whose content cannot be rendered are replaced in place and reported as
warnings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from editml.ast import (
    EditKind,
    InlineEdit,
    Node,
    Operation,
    StructuralSource,
    StructuralTarget,
    Text,
)
from editml.errors import (
    DuplicateSourceTag,
    Issue,
    MultipleMoveTargets,
    Severity,
    StructuralConflict,
    StructuralNestingTooDeep,
)
from editml.spans import Position

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 16


@dataclass
class SourceEntry:
    """A structural source together with its rendered block content."""

    node: StructuralSource
    rendered: str
    failed: bool = False
    consumed: bool = False


@dataclass
class StructureIndex:
    """Document-scoped view of the structural sources and targets by tag."""

    sources: dict[str, SourceEntry] = field(default_factory=dict)
    targets: dict[str, list[StructuralTarget]] = field(default_factory=dict)
    move_target_counts: dict[str, int] = field(default_factory=dict)

    def has_target(self, tag: str, operation: Operation) -> bool:
        return any(t.operation is operation for t in self.targets.get(tag, ()))


@dataclass
class ResolveContext:
    """State carried through resolution, including nested block rendering."""

    max_depth: int = DEFAULT_MAX_DEPTH
    depth: int = 0
    issues: list[Issue] = field(default_factory=list)

    def warn(self, message: str, position: Position | None) -> None:
        self.issues.append(Issue.at(message, position, Severity.WARNING))


def resolve_and_render(
    nodes: list[Node],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    depth: int = 0,
) -> tuple[str, list[Issue]]:
    """Resolve structural markup in *nodes* and return the Clean View text.

    Raises StructuralConflict or StructuralNestingTooDeep when the document
    cannot be rendered at all. Localized problems are returned as issues.
    """
    ctx = ResolveContext(max_depth=max_depth, depth=depth)
    index = build_index(nodes, ctx)
    parts = [_render_node(node, index, ctx) for node in nodes]
    return "".join(parts), ctx.issues


# ---------------------------------------------------------------------------
# Pass 1: index
# ---------------------------------------------------------------------------


def build_index(nodes: list[Node], ctx: ResolveContext) -> StructureIndex:
    """Collect sources and targets by tag and decide which moves are consumed."""
    index = StructureIndex()

    for node in nodes:
        if isinstance(node, StructuralSource):
            if node.tag in index.sources:
                raise DuplicateSourceTag(node.tag, node.span.start)
            rendered, failed = _render_block(node, ctx)
            index.sources[node.tag] = SourceEntry(node, rendered, failed)
        elif isinstance(node, StructuralTarget):
            index.targets.setdefault(node.tag, []).append(node)
            if node.operation is Operation.MOVE:
                count = index.move_target_counts.get(node.tag, 0) + 1
                index.move_target_counts[node.tag] = count
                if count > 1:
                    raise MultipleMoveTargets(node.tag, node.span.start)

    for tag, entry in index.sources.items():
        if entry.node.operation is Operation.MOVE and index.move_target_counts.get(tag) == 1:
            entry.consumed = True

    logger.debug(
        "depth %d: %d sources, %d target tags",
        ctx.depth,
        len(index.sources),
        len(index.targets),
    )
    return index


def _render_block(node: StructuralSource, ctx: ResolveContext) -> tuple[str, bool]:
    """Run the full pipeline over a source's block content.

    Returns (text, failed). A block whose own structure conflicts renders as
    an error marker instead of aborting the enclosing document.
    """
    from editml.parser import parse

    child_depth = ctx.depth + 1
    if child_depth > ctx.max_depth:
        raise StructuralNestingTooDeep(ctx.max_depth, node.span.start)

    position = node.span.start
    sub_nodes, parse_issues = parse(node.block_content, strip_comments=False)
    for issue in parse_issues:
        _reanchor(issue, node, ctx)

    try:
        text, sub_issues = resolve_and_render(
            sub_nodes, max_depth=ctx.max_depth, depth=child_depth
        )
    except StructuralNestingTooDeep as exc:
        raise StructuralNestingTooDeep(exc.max_depth, position) from None
    except StructuralConflict as exc:
        ctx.warn(f"content of block {node.tag!r} could not be rendered: {exc.message}", position)
        return _error_marker(node, "ERROR_TRANSFORMING_CONTENT"), True

    for issue in sub_issues:
        _reanchor(issue, node, ctx)
    return text, False


def _reanchor(issue: Issue, node: StructuralSource, ctx: ResolveContext) -> None:
    """Report a nested block's issue at the position of its source."""
    ctx.issues.append(
        Issue.at(f"in block {node.tag!r}: {issue.message}", node.span.start, issue.severity)
    )


# ---------------------------------------------------------------------------
# Pass 2: render
# ---------------------------------------------------------------------------


def _render_node(node: Node, index: StructureIndex, ctx: ResolveContext) -> str:
    if isinstance(node, Text):
        return node.value
    if isinstance(node, InlineEdit):
        return _render_inline(node)
    if isinstance(node, StructuralSource):
        return _render_source(node, index, ctx)
    if isinstance(node, StructuralTarget):
        return _render_target(node, index, ctx)
    raise TypeError(f"unexpected node type: {type(node).__name__}")


def _render_inline(node: InlineEdit) -> str:
    if node.kind in (EditKind.ADDITION, EditKind.HIGHLIGHT):
        return node.content
    # Deletions and comments are dropped.
    return ""


def _render_source(node: StructuralSource, index: StructureIndex, ctx: ResolveContext) -> str:
    entry = index.sources[node.tag]
    if entry.failed:
        return entry.rendered

    if node.operation is Operation.MOVE:
        if entry.consumed:
            return ""
        ctx.warn(f"unresolved move source {node.tag!r} left as literal text", node.span.start)
        return node.raw

    if index.has_target(node.tag, Operation.COPY):
        return entry.rendered
    ctx.warn(f"unresolved copy source {node.tag!r} left as literal text", node.span.start)
    return node.raw


def _render_target(node: StructuralTarget, index: StructureIndex, ctx: ResolveContext) -> str:
    entry = index.sources.get(node.tag)
    if entry is None:
        ctx.warn(
            f"unresolved {node.operation.value} target {node.tag!r} left as literal text",
            node.span.start,
        )
        return node.raw

    source_op = entry.node.operation
    if node.operation is not source_op:
        ctx.warn(
            f"{node.operation.value} target {node.tag!r} refers to a {source_op.value} source",
            node.span.start,
        )
        op = node.operation.value
        return f"{{{op}:{node.tag} (ERROR_OPERATION_MISMATCH_WITH_SOURCE {source_op.value})}}"

    if entry.failed:
        return entry.rendered

    if node.operation is Operation.MOVE and not entry.consumed:
        return node.raw
    return entry.rendered


def _error_marker(node: StructuralSource, code: str) -> str:
    return f"{{{node.operation.value}~{node.block_content} ({code})~{node.tag}}}"
