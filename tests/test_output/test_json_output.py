"""Tests for api_diff_report.output.json_output."""

from __future__ import annotations

import json
from io import StringIO

from api_diff_report.output.base import Renderer, result_to_dict
from api_diff_report.output.json_output import JsonRenderer
from api_diff_report.report.dispatcher import ReportResult, SectionReport

DELETED = SectionReport(
    "endpoints-deleted",
    ("Endpoints Deleted", "GET /pets", ""),
    True,
    ("endpoint deleted: GET /pets",),
)


def _capture_render(renderer: JsonRenderer, result: ReportResult) -> str:
    """Render a result and capture the output as a string."""
    renderer.render(result)
    output = renderer._output
    assert isinstance(output, StringIO)
    return output.getvalue()


class TestResultToDict:
    """Verify the serializable view of a report."""

    def test_shape(self) -> None:
        result = ReportResult(sections=(DELETED,), breaking=True, empty=False)
        assert result_to_dict(result) == {
            "breaking": True,
            "empty": False,
            "sections": [
                {
                    "section": "endpoints-deleted",
                    "breaking": True,
                    "reasons": ["endpoint deleted: GET /pets"],
                    "lines": ["Endpoints Deleted", "GET /pets", ""],
                },
            ],
        }


class TestJsonRenderer:
    """Verify JSON output."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(JsonRenderer(StringIO()), Renderer)

    def test_valid_json(self) -> None:
        result = ReportResult(sections=(DELETED,), breaking=True, empty=False)
        data = json.loads(_capture_render(JsonRenderer(StringIO()), result))
        assert data["breaking"] is True
        assert data["sections"][0]["lines"][1] == "GET /pets"

    def test_trailing_newline(self) -> None:
        result = ReportResult(sections=(), breaking=False, empty=True)
        assert _capture_render(JsonRenderer(StringIO()), result).endswith("}\n")

    def test_custom_indent(self) -> None:
        result = ReportResult(sections=(), breaking=False, empty=True)
        text = _capture_render(JsonRenderer(StringIO(), indent=4), result)
        assert '\n    "breaking": false' in text
