"""Rich console renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from api_diff_report.report.dispatcher import ReportResult, SectionReport

_LINE_STYLES: tuple[tuple[str, str], ...] = (
    ("New ", "green"),
    ("Deleted ", "red"),
    ("Modified ", "yellow"),
)


def _line_style(line: str) -> str:
    """Return the Rich style for a report line, ignoring its indent marker."""
    body = line.lstrip(" ")
    if body.startswith("- "):
        body = body[2:]
    for prefix, style in _LINE_STYLES:
        if body.startswith(prefix):
            return style
    if "changed from" in body:
        return "cyan"
    return ""


class RichRenderer:
    """Renders report sections with colour-coded lines.

    Section labels are bold, additions green, deletions red and
    modifications yellow. A closing line states whether the report is
    breaking.
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize with an optional Rich console.

        Args:
            console: Rich Console instance. Defaults to Console() if None.
        """
        self._console = console or Console()

    def render(self, result: ReportResult) -> None:
        """Render every section followed by the breaking summary."""
        for section in result.sections:
            self._render_section(section)
        self.render_summary(result)

    def render_summary(self, result: ReportResult) -> None:
        if result.breaking:
            self._console.print("[bold red]Breaking changes detected[/bold red]")
        elif result.empty:
            self._console.print("[dim]No changes[/dim]")
        else:
            self._console.print("[green]No breaking changes[/green]")

    def _render_section(self, section: SectionReport) -> None:
        for i, line in enumerate(section.lines):
            # Text objects keep "[a, b]" lists from being parsed as markup.
            style = "bold" if i == 0 and not line.startswith(" ") else _line_style(line)
            self._console.print(Text(line, style=style))
