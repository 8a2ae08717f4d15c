"""Shared test fixtures for api-diff-report."""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING, Any

import pytest
import yaml

from api_diff_report.core.loader import load_diff
from api_diff_report.report.breaking import BreakingFlag
from api_diff_report.report.config import ReportConfig
from api_diff_report.report.renderers import TextReport
from api_diff_report.report.writer import IndentWriter

if TYPE_CHECKING:
    from pathlib import Path

    from api_diff_report.core.models import Diff


class ReportHarness:
    """A TextReport over an in-memory sink, with helpers to read it back."""

    def __init__(self, config: ReportConfig | None = None, depth: int = 0) -> None:
        self.sink = io.StringIO()
        self.flag = BreakingFlag()
        self.report = TextReport(IndentWriter(self.sink, depth), self.flag, config)

    @property
    def lines(self) -> list[str]:
        return self.sink.getvalue().splitlines()


@pytest.fixture
def harness() -> ReportHarness:
    """Report at depth 0 in the default (breaking-only) configuration."""
    return ReportHarness()


@pytest.fixture
def petstore_document() -> dict[str, Any]:
    """A diff document in oasdiff key layout.

    Changes:
        info: title and version changed
        endpoints: POST /pets added, GET /pets/{id} deleted,
            GET /pets modified (description + new query param)
        tags: "store" added
    """
    return {
        "info": {
            "title": {"from": "Petstore", "to": "Pet Store"},
            "version": {"from": "1.0.0", "to": "2.0.0"},
        },
        "endpoints": {
            "added": [{"method": "POST", "path": "/pets"}],
            "deleted": [{"method": "GET", "path": "/pets/{id}"}],
            "modified": {
                "GET /pets": {
                    "description": {"from": "List pets", "to": "List all pets"},
                    "parameters": {"added": {"query": ["limit"]}},
                },
            },
        },
        "tags": {"added": ["store"]},
    }


@pytest.fixture
def petstore_diff(petstore_document: dict[str, Any]) -> Diff:
    return load_diff(petstore_document)


@pytest.fixture
def info_only_document() -> dict[str, Any]:
    """A diff with a non-breaking info change only."""
    return {"info": {"description": {"from": None, "to": "Pets API"}}}


@pytest.fixture
def petstore_yaml(tmp_path: Path, petstore_document: dict[str, Any]) -> Path:
    path = tmp_path / "diff.yaml"
    path.write_text(yaml.safe_dump(petstore_document))
    return path


@pytest.fixture
def petstore_json(tmp_path: Path, petstore_document: dict[str, Any]) -> Path:
    path = tmp_path / "diff.json"
    path.write_text(json.dumps(petstore_document))
    return path


@pytest.fixture
def info_only_yaml(tmp_path: Path, info_only_document: dict[str, Any]) -> Path:
    path = tmp_path / "info.yaml"
    path.write_text(yaml.safe_dump(info_only_document))
    return path


@pytest.fixture
def make_harness() -> type[ReportHarness]:
    """Factory for harnesses with a custom config or starting depth."""
    return ReportHarness
