"""Public API for api_diff_report.output."""

from __future__ import annotations

from api_diff_report.output.base import Renderer, result_to_dict
from api_diff_report.output.diff_output import DiffYamlRenderer
from api_diff_report.output.html_output import HtmlRenderer
from api_diff_report.output.json_output import JsonRenderer
from api_diff_report.output.rich_output import RichRenderer
from api_diff_report.output.text_output import TextRenderer
from api_diff_report.output.yaml_output import YamlRenderer

__all__ = [
    "DiffYamlRenderer",
    "HtmlRenderer",
    "JsonRenderer",
    "Renderer",
    "RichRenderer",
    "TextRenderer",
    "YamlRenderer",
    "result_to_dict",
]
