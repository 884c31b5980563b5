"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from editml import transform
from editml.ast import Node
from editml.errors import Issue
from editml.parser import parse
from editml.render import render_clean_view


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns only the nodes."""

    def _parse(source: str) -> list[Node]:
        nodes, _ = parse(source, "test.editml")
        return nodes

    return _parse


@pytest.fixture
def clean():
    """Return a helper that parses and renders source, asserting no errors."""

    def _clean(source: str) -> str:
        text, issues = transform(source, "test.editml")
        errors = [i for i in issues if i.is_error]
        assert not errors, f"Unexpected errors: {errors}"
        return text

    return _clean


@pytest.fixture
def render_source():
    """Return a helper that parses source and renders it, returning text and render issues."""

    def _render(source: str, **kwargs: object) -> tuple[str, list[Issue]]:
        nodes, _ = parse(source, "test.editml")
        return render_clean_view(nodes, **kwargs)

    return _render


def node_types(nodes: list[Node]) -> list[str]:
    return [type(n).__name__ for n in nodes]


def only(nodes: list[Node], cls: type) -> list:
    return [n for n in nodes if isinstance(n, cls)]


def messages(issues: list[Issue]) -> list[str]:
    return [i.message for i in issues]

