"""Public API for api_diff_report.report."""

from __future__ import annotations

from api_diff_report.report.breaking import BreakingFlag, BreakingState
from api_diff_report.report.config import DEFAULT_SECTIONS, ReportConfig
from api_diff_report.report.dispatcher import (
    ReportResult,
    SectionReport,
    render_report,
    render_section,
    render_section_report,
    render_sections,
)
from api_diff_report.report.renderers import TextReport
from api_diff_report.report.writer import IndentWriter

__all__ = [
    "DEFAULT_SECTIONS",
    "BreakingFlag",
    "BreakingState",
    "IndentWriter",
    "ReportConfig",
    "ReportResult",
    "SectionReport",
    "TextReport",
    "render_report",
    "render_section",
    "render_section_report",
    "render_sections",
]
