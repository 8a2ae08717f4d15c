"""Configuration for a report run."""

from __future__ import annotations

from dataclasses import dataclass

from api_diff_report.core.models import Section

# Sections rendered by a full report, in report order. The paths section
# repeats what the endpoint sections already show, so it is opt-in.
DEFAULT_SECTIONS: tuple[Section, ...] = tuple(s for s in Section if s != Section.paths)


@dataclass(frozen=True)
class ReportConfig:
    """Options controlling how a diff tree is reported.

    Attributes:
        breaking_only: Treat endpoint modifications as breaking changes.
        sections: Sections rendered by a full report, in order.
    """

    breaking_only: bool = True
    sections: tuple[Section, ...] = DEFAULT_SECTIONS
