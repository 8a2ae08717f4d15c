"""Per-run breaking-change accumulator."""

from __future__ import annotations

import logging
from enum import StrEnum

logger = logging.getLogger(__name__)


class BreakingState(StrEnum):
    """Classification of a rendered report."""

    not_breaking = "not-breaking"
    breaking = "breaking"


class BreakingFlag:
    """Two-state flag owned by one top-level render.

    Starts as ``not_breaking``; :meth:`mark` moves it to ``breaking`` and
    there is no transition back. Renderers only ever call :meth:`mark`.
    """

    def __init__(self) -> None:
        self._state = BreakingState.not_breaking
        self._reasons: list[str] = []

    @property
    def state(self) -> BreakingState:
        return self._state

    @property
    def is_breaking(self) -> bool:
        return self._state == BreakingState.breaking

    @property
    def reasons(self) -> tuple[str, ...]:
        """Distinct reasons in the order they were first recorded."""
        return tuple(self._reasons)

    def mark(self, reason: str) -> None:
        """Record a breaking change."""
        if self._state != BreakingState.breaking:
            logger.debug("report marked breaking: %s", reason)
        self._state = BreakingState.breaking
        if reason not in self._reasons:
            self._reasons.append(reason)
