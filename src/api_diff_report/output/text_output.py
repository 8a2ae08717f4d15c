"""Plain text renderer (default output mode)."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO

    from api_diff_report.report.dispatcher import ReportResult


class TextRenderer:
    """Writes report lines unchanged to a text stream.

    Output goes to stdout by default. Pass a custom TextIO for file
    output or testing.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output or sys.stdout

    def render(self, result: ReportResult) -> None:
        """Write every section's lines in order."""
        self._output.write(result.text)
