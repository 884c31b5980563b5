"""Integration tests: render each example document, compare to expected Clean View."""

from __future__ import annotations

from pathlib import Path

import pytest

from editml import transform
from editml.parser import parse
from editml.render import render_markup

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


def _find_editml_files() -> list[Path]:
    return sorted(EXAMPLES_DIR.glob("*.editml"))


@pytest.fixture(params=_find_editml_files(), ids=lambda p: p.stem)
def editml_file(request: pytest.FixtureRequest) -> Path:
    return request.param


class TestExampleFiles:
    def test_clean_view_matches_expected(self, editml_file: Path) -> None:
        source = editml_file.read_text(encoding="utf-8")
        expected = editml_file.with_suffix(".txt").read_text(encoding="utf-8")

        text, issues = transform(source, editml_file.name)

        assert issues == []
        assert text == expected

    def test_markup_round_trips(self, editml_file: Path) -> None:
        """Without comment stripping, the node raws reproduce the document exactly."""
        source = editml_file.read_text(encoding="utf-8")
        nodes, _ = parse(source, editml_file.name, strip_comments=False)
        assert render_markup(nodes) == source
