"""Tests for api_diff_report.output.diff_output."""

from __future__ import annotations

from io import StringIO
from typing import Any

import yaml

from api_diff_report.core.models import Diff
from api_diff_report.output.base import Renderer
from api_diff_report.output.diff_output import DiffYamlRenderer
from api_diff_report.report.dispatcher import ReportResult, render_report


class TestDiffYamlRenderer:
    """Verify the diff tree YAML export."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(DiffYamlRenderer(StringIO()), Renderer)

    def test_writes_tree(self, petstore_diff: Diff, petstore_document: dict[str, Any]) -> None:
        output = StringIO()
        DiffYamlRenderer(output).render(render_report(petstore_diff))
        assert yaml.safe_load(output.getvalue()) == petstore_document

    def test_block_style(self, petstore_diff: Diff) -> None:
        output = StringIO()
        DiffYamlRenderer(output).render(render_report(petstore_diff))
        assert "tags:\n  added:\n  - store\n" in output.getvalue()

    def test_empty_diff_writes_nothing(self) -> None:
        output = StringIO()
        DiffYamlRenderer(output).render(render_report(Diff()))
        assert output.getvalue() == ""

    def test_result_without_tree_writes_nothing(self) -> None:
        output = StringIO()
        DiffYamlRenderer(output).render(ReportResult(sections=(), breaking=False, empty=True))
        assert output.getvalue() == ""
