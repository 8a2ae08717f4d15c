"""Top-level entry points: render one section, or a whole report.

Dispatch is a flat table from :class:`Section` to a leading label and one
renderer. Every call creates its own :class:`BreakingFlag`, so repeated or
interleaved runs in one process never share breaking state.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api_diff_report.core.models import Diff, Section, is_empty
from api_diff_report.report.breaking import BreakingFlag
from api_diff_report.report.config import ReportConfig
from api_diff_report.report.renderers import TextReport
from api_diff_report.report.writer import IndentWriter

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import Any, TextIO

logger = logging.getLogger(__name__)

NO_CHANGES = "No changes"


def _overall(report: TextReport, d: Diff) -> None:
    report.value(d.openapi, "OpenAPI")


def _info(report: TextReport, d: Diff) -> None:
    report.render_info(d.info)


def _paths(report: TextReport, d: Diff) -> None:
    report.render_paths(d.paths)


def _external_docs(report: TextReport, d: Diff) -> None:
    report.indent().render_external_docs(d.external_docs)
    report.print("")


def _on(attr: str, method: Callable[[TextReport, Any], None]) -> Callable[[TextReport, Diff], None]:
    """Adapt a renderer method to take the root diff and pick *attr* from it."""

    def render(report: TextReport, d: Diff) -> None:
        method(report, getattr(d, attr))

    return render


# section -> (leading label, renderer, part of the tree it reads)
_SECTIONS: dict[Section, tuple[str | None, Callable[[TextReport, Diff], None], str]] = {
    Section.overall: (None, _overall, "openapi"),
    Section.info: ("Info Changed", _info, "info"),
    Section.paths: ("Paths Changed", _paths, "paths"),
    Section.endpoints_added: (
        "Endpoints Added",
        _on("endpoints", TextReport.render_endpoints_added),
        "endpoints.added",
    ),
    Section.endpoints_deleted: (
        "Endpoints Deleted",
        _on("endpoints", TextReport.render_endpoints_deleted),
        "endpoints.deleted",
    ),
    Section.endpoints_modified: (
        "Endpoints Modified",
        _on("endpoints", TextReport.render_endpoints_modified),
        "endpoints.modified",
    ),
    Section.security_added: (
        "Security Added",
        _on("security", TextReport.render_security_added),
        "security.added",
    ),
    Section.security_deleted: (
        "Security Deleted",
        _on("security", TextReport.render_security_deleted),
        "security.deleted",
    ),
    Section.security_modified: (
        "Security Modified",
        _on("security", TextReport.render_security_modified),
        "security.modified",
    ),
    Section.server_added: (
        "Server Added",
        _on("servers", TextReport.render_servers_added),
        "servers.added",
    ),
    Section.server_deleted: (
        "Server Deleted",
        _on("servers", TextReport.render_servers_deleted),
        "servers.deleted",
    ),
    Section.server_modified: (
        "Server Modified",
        _on("servers", TextReport.render_servers_modified),
        "servers.modified",
    ),
    Section.tag_added: ("Tag Added", _on("tags", TextReport.render_tags_added), "tags.added"),
    Section.tag_deleted: (
        "Tags Deleted",
        _on("tags", TextReport.render_tags_deleted),
        "tags.deleted",
    ),
    Section.tag_modified: (
        "Tag Modified",
        _on("tags", TextReport.render_tags_modified),
        "tags.modified",
    ),
    Section.external_docs: ("External Docs Changed", _external_docs, "external_docs"),
}


@dataclass(frozen=True)
class SectionReport:
    """Rendered output of one section."""

    section: str
    lines: tuple[str, ...]
    breaking: bool
    reasons: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


@dataclass(frozen=True)
class ReportResult:
    """Rendered output of a full report run, with the tree it was rendered from."""

    sections: tuple[SectionReport, ...]
    breaking: bool
    empty: bool
    diff: Diff | None = None

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.sections)


def _parse_section(section: Section | str) -> Section | None:
    try:
        return Section(section)
    except ValueError:
        return None


def section_has_changes(section: Section, diff: Diff) -> bool:
    """Return True if the part of *diff* read by *section* is non-empty."""
    node: Any = diff
    for attr in _SECTIONS[section][2].split("."):
        if is_empty(node):
            return False
        node = getattr(node, attr)
    if node is None or hasattr(node, "is_empty"):
        return not is_empty(node)
    return bool(node)


def render_section(
    section: Section | str,
    diff: Diff,
    sink: TextIO,
    config: ReportConfig | None = None,
) -> BreakingFlag:
    """Render one section of *diff* to *sink* and return its breaking flag.

    The flag is created fresh for this call. Unknown section identifiers
    print ``No changes`` and return a non-breaking flag.

    Raises:
        MalformedDiffTree: If a collection violates the partition invariant.
    """
    breaking = BreakingFlag()
    report = TextReport(IndentWriter(sink), breaking, config)

    parsed = _parse_section(section)
    if parsed is None:
        logger.debug("unknown section %r, nothing to render", section)
        report.print(NO_CHANGES)
        return breaking

    label, render, _ = _SECTIONS[parsed]
    logger.debug("rendering section %s", parsed)
    if label is not None:
        report.print(label)
    render(report, diff)
    return breaking


def render_section_report(
    section: Section | str,
    diff: Diff,
    config: ReportConfig | None = None,
) -> SectionReport:
    """Render one section into memory."""
    buf = io.StringIO()
    breaking = render_section(section, diff, buf, config)
    return SectionReport(
        section=str(section),
        lines=tuple(buf.getvalue().splitlines()),
        breaking=breaking.is_breaking,
        reasons=breaking.reasons,
    )


def render_sections(
    sections: Iterable[Section | str],
    diff: Diff,
    config: ReportConfig | None = None,
) -> ReportResult:
    """Render the given sections in order, each with its own breaking flag.

    Sections are rendered even when their part of the tree is empty, in
    which case only the leading label is printed.
    """
    reports = tuple(render_section_report(section, diff, config) for section in sections)
    breaking = any(s.breaking for s in reports)
    logger.debug("rendered %d section(s), breaking=%s", len(reports), breaking)
    return ReportResult(sections=reports, breaking=breaking, empty=diff.is_empty(), diff=diff)


def render_report(diff: Diff, config: ReportConfig | None = None) -> ReportResult:
    """Render every configured section that has changes.

    The report is breaking if any section is. When no configured section
    has changes the result holds a single ``No changes`` section.
    """
    config = config or ReportConfig()
    selected = [s for s in config.sections if section_has_changes(s, diff)]
    if not selected:
        return ReportResult(
            sections=(SectionReport(section="none", lines=(NO_CHANGES,), breaking=False),),
            breaking=False,
            empty=diff.is_empty(),
            diff=diff,
        )
    return render_sections(selected, diff, config)
