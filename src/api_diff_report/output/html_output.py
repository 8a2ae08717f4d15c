"""HTML export renderer with GitHub-inspired styling."""

from __future__ import annotations

import html
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO

    from api_diff_report.report.dispatcher import ReportResult, SectionReport

_CUSTOM_CSS = """\
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
    max-width: 960px;
    margin: 0 auto;
    padding: 24px;
    color: #1f2328;
    background: #fff;
}
h1 { font-size: 1.5em; border-bottom: 1px solid #d1d9e0; padding-bottom: 8px; }
h2 { font-size: 1.2em; margin-top: 24px; }
.section {
    border: 1px solid #d1d9e0;
    border-radius: 6px;
    overflow: auto;
    margin-bottom: 16px;
}
.section pre {
    margin: 0;
    padding: 8px 12px;
    font-family: ui-monospace, SFMono-Regular, "SF Mono", Menlo, monospace;
    font-size: 12px;
    line-height: 1.5;
}
.verdict { font-weight: 600; padding: 8px 0; }
.verdict-breaking { color: #cf222e; }
.verdict-compatible { color: #1a7f37; }
.verdict-empty { color: #656d76; }
.section-breaking { border-color: #cf222e; }
"""


class HtmlRenderer:
    """Renders a report as a standalone HTML document.

    Each section becomes an ``<h2>`` heading followed by its lines in a
    ``<pre>`` block. All text is escaped.
    """

    def __init__(self, output: TextIO | None = None, *, title: str = "API diff report") -> None:
        """Initialize with an optional output stream.

        Args:
            output: Text stream for HTML output. Defaults to sys.stdout.
            title: HTML document title.
        """
        self._output = output or sys.stdout
        self._title = title

    def render(self, result: ReportResult) -> None:
        """Render the report result as a standalone HTML document."""
        body = (
            f"<h1>{html.escape(self._title)}</h1>\n"
            + self._build_verdict_html(result)
            + "".join(self._build_section_html(s) for s in result.sections)
        )
        self._output.write(self._build_document(body))

    def _build_document(self, body: str) -> str:
        """Wrap body content in a full HTML document with embedded CSS."""
        return (
            "<!DOCTYPE html>\n"
            f'<html lang="en">\n<head>\n'
            f'<meta charset="utf-8">\n'
            f"<title>{html.escape(self._title)}</title>\n"
            f"<style>\n{_CUSTOM_CSS}\n</style>\n"
            f"</head>\n<body>\n{body}\n</body>\n</html>\n"
        )

    @staticmethod
    def _build_verdict_html(result: ReportResult) -> str:
        if result.breaking:
            css_class, text = "breaking", "Breaking changes detected"
        elif result.empty:
            css_class, text = "empty", "No changes"
        else:
            css_class, text = "compatible", "No breaking changes"
        return f'<div class="verdict verdict-{css_class}">{text}</div>\n'

    @staticmethod
    def _build_section_html(section: SectionReport) -> str:
        """Build the heading and pre block for one section."""
        extra = " section-breaking" if section.breaking else ""
        lines = "\n".join(html.escape(line) for line in section.lines)
        return (
            f"<h2>{html.escape(section.section)}</h2>\n"
            f'<div class="section{extra}"><pre>{lines}</pre></div>\n'
        )
