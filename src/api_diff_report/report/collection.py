"""Generic rendering for added/deleted/modified collections.

Every collection category (paths, operations, servers, tags, properties,
examples, headers, media types, security requirements, extensions,
variables) is rendered in the same order: sorted additions, sorted
deletions, then each modified entry in sorted key order with its nested
diff one level deeper.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from api_diff_report.core.errors import MalformedDiffTree
from api_diff_report.core.models import is_empty

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from api_diff_report.core.models import CollectionDiff
    from api_diff_report.report.renderers import TextReport

K = TypeVar("K")
T = TypeVar("T")


def sorted_keys(mapping: Mapping[K, Any], key: Callable[[K], Any] | None = None) -> list[K]:
    """Return the keys of *mapping* in lexicographic (or *key*) order."""
    return sorted(mapping, key=key)


def check_partition(
    field: str,
    added: Iterable[Any],
    deleted: Iterable[Any],
    modified: Mapping[Any, Any],
) -> None:
    """Raise if an identifier is both modified and added or deleted.

    Raises:
        MalformedDiffTree: Naming *field* and the overlapping identifiers.
    """
    overlap = (set(added) | set(deleted)) & set(modified)
    if overlap:
        names = ", ".join(sorted(str(o) for o in overlap))
        msg = f"identifiers both modified and added/deleted: {names}"
        raise MalformedDiffTree(field, msg)


def render_added(
    report: TextReport,
    names: Iterable[str],
    label: str,
    on_entry: Callable[[str], None] | None = None,
) -> None:
    for name in sorted(names):
        report.print("New", f"{label}:", name)
        if on_entry is not None:
            on_entry(name)


def render_deleted(
    report: TextReport,
    names: Iterable[str],
    label: str,
    on_entry: Callable[[str], None] | None = None,
) -> None:
    for name in sorted(names):
        report.print("Deleted", f"{label}:", name)
        if on_entry is not None:
            on_entry(name)


def render_modified(
    report: TextReport,
    modified: Mapping[str, T],
    label: str,
    render_item: Callable[[TextReport, T], None],
    on_entry: Callable[[str], None] | None = None,
) -> None:
    for key in sorted_keys(modified):
        report.print("Modified", f"{label}:", key)
        render_item(report.indent(), modified[key])
        if on_entry is not None:
            on_entry(key)


def render_collection(
    report: TextReport,
    diff: CollectionDiff[T] | None,
    label: str,
    render_item: Callable[[TextReport, T], None],
    *,
    field: str,
    on_entry: Callable[[str], None] | None = None,
) -> None:
    """Render a collection diff in canonical added, deleted, modified order.

    Args:
        report: Report positioned at the collection's depth.
        diff: The collection diff; nothing is rendered when empty.
        label: Human label for one entry (e.g. ``"path"``).
        render_item: Renders one modified entry at the deeper report.
        field: Field path used in error messages.
        on_entry: Called once for every rendered entry.

    Raises:
        MalformedDiffTree: If the added/deleted/modified sets overlap.
    """
    if is_empty(diff):
        return
    check_partition(field, diff.added, diff.deleted, diff.modified)
    render_added(report, diff.added, label, on_entry)
    render_deleted(report, diff.deleted, label, on_entry)
    render_modified(report, diff.modified, label, render_item, on_entry)
