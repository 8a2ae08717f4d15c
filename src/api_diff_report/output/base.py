"""Renderer protocol for report output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from api_diff_report.report.dispatcher import ReportResult


@runtime_checkable
class Renderer(Protocol):
    """Protocol for rendering report results.

    Implementations must provide a render method that takes a ReportResult
    and writes output to the appropriate destination (console, file, etc.).
    """

    def render(self, result: ReportResult) -> None:
        """Render the report result."""
        ...


def result_to_dict(result: ReportResult) -> dict[str, Any]:
    """Return a JSON/YAML friendly view of a report result."""
    return {
        "breaking": result.breaking,
        "empty": result.empty,
        "sections": [
            {
                "section": s.section,
                "breaking": s.breaking,
                "reasons": list(s.reasons),
                "lines": list(s.lines),
            }
            for s in result.sections
        ],
    }
