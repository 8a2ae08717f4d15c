"""JSON export renderer."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING

from api_diff_report.output.base import result_to_dict

if TYPE_CHECKING:
    from typing import TextIO

    from api_diff_report.report.dispatcher import ReportResult


class JsonRenderer:
    """Renders report results as JSON to a text stream.

    The document holds the overall ``breaking`` and ``empty`` flags and one
    entry per section with its lines, breaking flag and reasons.
    """

    def __init__(self, output: TextIO | None = None, *, indent: int = 2) -> None:
        """Initialize with an optional output stream.

        Args:
            output: Text stream for JSON output. Defaults to sys.stdout.
            indent: JSON indentation level. Defaults to 2.
        """
        self._output = output or sys.stdout
        self._indent = indent

    def render(self, result: ReportResult) -> None:
        """Serialize the report result as JSON."""
        json.dump(result_to_dict(result), self._output, indent=self._indent)
        self._output.write("\n")
