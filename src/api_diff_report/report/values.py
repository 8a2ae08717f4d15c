"""Leaf rendering: value changes and presence flags."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from api_diff_report.core.models import is_empty

if TYPE_CHECKING:
    from api_diff_report.core.models import ValueDiff
    from api_diff_report.report.writer import IndentWriter


def quote(value: Any) -> str:
    """Format a scalar for a report line.

    Strings are single-quoted, ``None`` becomes ``null``, booleans use
    their lowercase spelling, integral floats drop their ``.0`` and
    sequences render as ``[a, b]`` with each element quoted. Mappings render
    as ``{key: value}`` with keys bare and values quoted, in source order.
    """
    if value is None:
        return "null"
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list | tuple):
        return format_list(value)
    if isinstance(value, Mapping):
        return format_mapping(value)
    return str(value)


def format_list(values: Any) -> str:
    """Format a sequence as ``[a, b]`` keeping its order."""
    return "[" + ", ".join(quote(v) for v in values) + "]"


def format_mapping(values: Mapping[Any, Any]) -> str:
    """Format a mapping as ``{a: 1, b: 'x'}`` keeping its order."""
    return "{" + ", ".join(f"{k}: {quote(v)}" for k, v in values.items()) + "}"


def render_value(writer: IndentWriter, diff: ValueDiff | None, label: str) -> None:
    """Emit ``<label> changed from <from> to <to>`` unless *diff* is empty."""
    if is_empty(diff):
        return
    writer.emit(label, "changed from", quote(diff.from_value), "to", quote(diff.to_value))


def render_flag(writer: IndentWriter, condition: bool, *fields: Any) -> None:
    """Emit *fields* as one line iff *condition* holds."""
    if condition:
        writer.emit(*fields)
