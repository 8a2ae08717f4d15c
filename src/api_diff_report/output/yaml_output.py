"""YAML export renderer."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import yaml

from api_diff_report.output.base import result_to_dict

if TYPE_CHECKING:
    from typing import TextIO

    from api_diff_report.report.dispatcher import ReportResult


class YamlRenderer:
    """Renders report results as a YAML document with the same shape as JSON."""

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output or sys.stdout

    def render(self, result: ReportResult) -> None:
        """Serialize the report result as YAML."""
        yaml.safe_dump(
            result_to_dict(result),
            self._output,
            sort_keys=False,
            allow_unicode=True,
        )
