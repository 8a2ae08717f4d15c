"""Tests for api_diff_report.report.collection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from api_diff_report.core.errors import MalformedDiffTree
from api_diff_report.core.models import CollectionDiff, TagDiff, ValueDiff
from api_diff_report.report.collection import check_partition, render_collection, sorted_keys
from api_diff_report.report.renderers import TextReport

if TYPE_CHECKING:
    from conftest import ReportHarness


class TestSortedKeys:
    """Verify deterministic key order."""

    def test_lexicographic(self) -> None:
        assert sorted_keys({"b": 1, "a": 2, "C": 3}) == ["C", "a", "b"]

    def test_custom_key(self) -> None:
        assert sorted_keys({"bb": 1, "a": 2}, key=len) == ["a", "bb"]


class TestCheckPartition:
    """Verify the added/deleted/modified partition check."""

    def test_disjoint(self) -> None:
        check_partition("tags", ["a"], ["b"], {"c": None})

    def test_overlap_with_added(self) -> None:
        with pytest.raises(MalformedDiffTree) as exc_info:
            check_partition("tags", ["a"], [], {"a": None})
        assert exc_info.value.field == "tags"
        assert "a" in exc_info.value.reason

    def test_overlap_with_deleted(self) -> None:
        with pytest.raises(MalformedDiffTree):
            check_partition("paths", [], ["/pets"], {"/pets": None})

    def test_added_and_deleted_may_share(self) -> None:
        check_partition("tags", ["a"], ["a"], {})


class TestRenderCollection:
    """Verify canonical collection output order."""

    def test_added_then_deleted_then_modified(self, harness: ReportHarness) -> None:
        diff = CollectionDiff(
            added=("b", "a"),
            deleted=("d", "c"),
            modified={"f": TagDiff(description=ValueDiff("x", "y")), "e": TagDiff(name=ValueDiff("e", "E"))},
        )
        render_collection(harness.report, diff, "tag", TextReport.render_tag, field="tags")
        assert harness.lines == [
            "New tag: a",
            "New tag: b",
            "Deleted tag: c",
            "Deleted tag: d",
            "Modified tag: e",
            "- Name changed from 'e' to 'E'",
            "Modified tag: f",
            "- Description changed from 'x' to 'y'",
        ]

    def test_empty_renders_nothing(self, harness: ReportHarness) -> None:
        render_collection(harness.report, CollectionDiff(), "tag", TextReport.render_tag, field="tags")
        render_collection(harness.report, None, "tag", TextReport.render_tag, field="tags")
        assert harness.lines == []

    def test_on_entry_called_per_entry(self, harness: ReportHarness) -> None:
        seen: list[str] = []
        diff = CollectionDiff(added=("a",), deleted=("b",), modified={"c": TagDiff()})
        render_collection(
            harness.report, diff, "tag", TextReport.render_tag, field="tags", on_entry=seen.append
        )
        assert seen == ["a", "b", "c"]

    def test_partition_violation(self, harness: ReportHarness) -> None:
        diff = CollectionDiff(added=("a",), modified={"a": TagDiff()})
        with pytest.raises(MalformedDiffTree) as exc_info:
            render_collection(harness.report, diff, "tag", TextReport.render_tag, field="tags")
        assert exc_info.value.field == "tags"
        assert harness.lines == []
