"""Public API for api_diff_report.core."""

from __future__ import annotations

from api_diff_report.core.dumper import dump_diff
from api_diff_report.core.errors import MalformedDiffTree, ReportError
from api_diff_report.core.loader import load_diff, load_diff_file
from api_diff_report.core.models import (
    CollectionDiff,
    Diff,
    Endpoint,
    EndpointsDiff,
    MethodDiff,
    OutputMode,
    ParamLocation,
    ParametersDiff,
    SchemaDiff,
    SchemaListDiff,
    Section,
    StringsDiff,
    ValueDiff,
)

__all__ = [
    "CollectionDiff",
    "Diff",
    "Endpoint",
    "EndpointsDiff",
    "MalformedDiffTree",
    "MethodDiff",
    "OutputMode",
    "ParamLocation",
    "ParametersDiff",
    "ReportError",
    "SchemaDiff",
    "SchemaListDiff",
    "Section",
    "StringsDiff",
    "ValueDiff",
    "dump_diff",
    "load_diff",
    "load_diff_file",
]
