"""Tests for api_diff_report.output.text_output."""

from __future__ import annotations

from io import StringIO

from api_diff_report.output.base import Renderer
from api_diff_report.output.text_output import TextRenderer
from api_diff_report.report.dispatcher import ReportResult, SectionReport


def _make_result(*sections: SectionReport, breaking: bool = False) -> ReportResult:
    """Helper to build a ReportResult for testing."""
    return ReportResult(sections=sections, breaking=breaking, empty=not sections)


class TestTextRenderer:
    """Verify plain text output."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(TextRenderer(StringIO()), Renderer)

    def test_writes_lines_verbatim(self) -> None:
        output = StringIO()
        result = _make_result(
            SectionReport("tag-added", ("Tag Added", "New tag: store"), False),
            SectionReport("endpoints-deleted", ("Endpoints Deleted", "GET /pets", ""), True),
        )
        TextRenderer(output).render(result)
        assert output.getvalue() == "Tag Added\nNew tag: store\nEndpoints Deleted\nGET /pets\n\n"

    def test_empty_result(self) -> None:
        output = StringIO()
        TextRenderer(output).render(_make_result())
        assert output.getvalue() == ""
