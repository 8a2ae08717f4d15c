"""Raw diff tree export renderer."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import yaml

from api_diff_report.core.dumper import dump_diff
from api_diff_report.core.models import is_empty

if TYPE_CHECKING:
    from typing import TextIO

    from api_diff_report.report.dispatcher import ReportResult


class DiffYamlRenderer:
    """Writes the diff tree behind a report as YAML in oasdiff key layout.

    Nothing is written when the two versions are equivalent.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output or sys.stdout

    def render(self, result: ReportResult) -> None:
        """Serialize the report's diff tree as YAML."""
        if is_empty(result.diff):
            return
        yaml.safe_dump(
            dump_diff(result.diff),
            self._output,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
