"""Tests for the api_diff_report public API re-exports."""

from __future__ import annotations

from dataclasses import is_dataclass
from enum import StrEnum

import api_diff_report.core as core
import api_diff_report.output as output
import api_diff_report.report as report
from api_diff_report.core import errors, loader, models
from api_diff_report.report import dispatcher

EXPECTED_CORE_NAMES = {
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
}


class TestAllExports:
    """Verify __all__ matches the expected public API surface."""

    def test_core_names(self) -> None:
        assert set(core.__all__) == EXPECTED_CORE_NAMES

    def test_all_names_are_importable(self) -> None:
        for module in (core, report, output):
            for name in module.__all__:
                assert hasattr(module, name), f"{name} listed in __all__ but not importable"


class TestReExportIdentity:
    """Verify re-exports are the same objects as the originals."""

    def test_core(self) -> None:
        assert core.Diff is models.Diff
        assert core.Section is models.Section
        assert core.MalformedDiffTree is errors.MalformedDiffTree
        assert core.load_diff is loader.load_diff

    def test_report(self) -> None:
        assert report.render_report is dispatcher.render_report
        assert report.ReportResult is dispatcher.ReportResult


class TestReExportTypes:
    """Verify re-exported symbols have the expected types."""

    def test_enums_are_str_enums(self) -> None:
        for cls in (core.OutputMode, core.Section, core.ParamLocation, report.BreakingState):
            assert issubclass(cls, StrEnum), f"{cls.__name__} is not a StrEnum"

    def test_dataclasses(self) -> None:
        for cls in (core.Diff, core.ValueDiff, report.ReportConfig, report.SectionReport):
            assert is_dataclass(cls), f"{cls.__name__} is not a dataclass"

    def test_errors(self) -> None:
        assert issubclass(core.MalformedDiffTree, core.ReportError)
        assert issubclass(core.MalformedDiffTree, ValueError)
