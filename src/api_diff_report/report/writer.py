"""Indented line writer shared by all report renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing import TextIO

_MARKER = "- "
_INDENT = "  "


def line_prefix(depth: int) -> str:
    """Return the prefix for a line at *depth*.

    Depth 0 has no marker; deeper lines get ``2 * (depth - 1)`` spaces
    followed by ``"- "``.
    """
    if depth <= 0:
        return ""
    return _INDENT * (depth - 1) + _MARKER


@dataclass(frozen=True)
class IndentWriter:
    """Writes depth-prefixed lines to a text sink.

    The writer is immutable: :meth:`child` returns a new writer one level
    deeper over the same sink, so siblings can fan out from one parent.
    Write errors from the sink propagate unchanged.
    """

    sink: TextIO
    depth: int = 0

    def __post_init__(self) -> None:
        if self.depth < 0:
            msg = f"depth must be non-negative, got {self.depth}"
            raise ValueError(msg)

    def emit(self, *fields: Any) -> None:
        """Write one line made of *fields* joined by single spaces."""
        text = " ".join(str(f) for f in fields)
        prefix = line_prefix(self.depth)
        if not text:
            # empty lines carry no trailing whitespace
            prefix = prefix.rstrip()
        self.sink.write(f"{prefix}{text}\n")

    def child(self) -> IndentWriter:
        """Return a writer one indentation level deeper."""
        return IndentWriter(self.sink, self.depth + 1)
