"""Exceptions raised while loading or rendering a diff tree."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for api-diff-report errors."""


class MalformedDiffTree(ReportError, ValueError):
    """Raised when a diff tree node violates its shape contract.

    Attributes:
        field: Dotted path of the offending field (e.g. ``paths.modified``).
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"malformed diff tree at '{field}': {reason}")
