"""Encode a typed diff tree back into an oasdiff-layout document.

The output uses the same key names :mod:`api_diff_report.core.loader`
reads, so a dumped tree loads back to an equal tree. Empty nodes are left
out, which makes the document of an empty diff ``{}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any

from api_diff_report.core.models import (
    CollectionDiff,
    Diff,
    EndpointsDiff,
    ParametersDiff,
    SchemaListDiff,
    StringsDiff,
    ValueDiff,
    is_empty,
)

# Attributes whose document key is not the camelCase of the attribute name.
_KEYS: dict[str, str] = {
    "openapi": "openAPI",
    "not_": "not",
    "circular_ref_changed": "circularRef",
    "discriminator_changed": "discriminator",
    "encodings_changed": "encoding",
    "callbacks_changed": "callbacks",
}


def _key(attr: str) -> str:
    if attr in _KEYS:
        return _KEYS[attr]
    head, *rest = attr.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _without_empty(entries: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in entries.items() if v not in ((), [], {}, None, 0)}


def _dump(node: Any) -> Any:
    if isinstance(node, ValueDiff):
        return {"from": node.from_value, "to": node.to_value}
    if isinstance(node, StringsDiff):
        return _without_empty({"added": list(node.added), "deleted": list(node.deleted)})
    if isinstance(node, CollectionDiff):
        return _without_empty(
            {
                "added": list(node.added),
                "deleted": list(node.deleted),
                "modified": {k: _dump(v) for k, v in node.modified.items()},
            }
        )
    if isinstance(node, ParametersDiff):
        return _without_empty(
            {
                "added": {loc: list(names) for loc, names in node.added.items() if names},
                "deleted": {loc: list(names) for loc, names in node.deleted.items() if names},
                "modified": {
                    loc: {name: _dump(p) for name, p in params.items()}
                    for loc, params in node.modified.items()
                    if params
                },
            }
        )
    if isinstance(node, SchemaListDiff):
        return _without_empty(
            {
                "added": node.added,
                "deleted": node.deleted,
                "modified": {ref: _dump(s) for ref, s in node.modified.items()},
            }
        )
    if isinstance(node, EndpointsDiff):
        return _without_empty(
            {
                "added": [{"method": e.method, "path": e.path} for e in node.added],
                "deleted": [{"method": e.method, "path": e.path} for e in node.deleted],
                "modified": {str(e): _dump(m) for e, m in node.modified.items()},
            }
        )
    if isinstance(node, Mapping):
        return {str(k): _dump(v) for k, v in node.items()}
    if is_dataclass(node):
        out: dict[str, Any] = {}
        for f in fields(node):
            value = getattr(node, f.name)
            if isinstance(value, bool):
                if value:
                    out[_key(f.name)] = True
            elif not is_empty(value):
                out[_key(f.name)] = _dump(value)
        return out
    msg = f"cannot encode {type(node).__name__}"
    raise TypeError(msg)


def dump_diff(diff: Diff) -> dict[str, Any]:
    """Return *diff* as a plain document in oasdiff key layout."""
    return _dump(diff)
