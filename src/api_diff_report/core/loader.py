"""Decode a serialized diff document into the typed diff tree.

Documents use the key names emitted by oasdiff (``openAPI``, ``paths``,
``schemaAdded``, ``minLength``...). Leaves are ``{from, to}`` mappings and
collections are ``{added, deleted, modified}`` mappings. Unknown keys are
ignored; container type mismatches raise :class:`MalformedDiffTree`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import yaml

from api_diff_report.core.errors import MalformedDiffTree
from api_diff_report.core.models import (
    CollectionDiff,
    ContactDiff,
    Diff,
    Endpoint,
    EndpointsDiff,
    ExampleDiff,
    ExternalDocsDiff,
    HeaderDiff,
    InfoDiff,
    LicenseDiff,
    MediaTypeDiff,
    MethodDiff,
    ParameterDiff,
    ParametersDiff,
    PathDiff,
    RequestBodyDiff,
    ResponseDiff,
    SchemaDiff,
    SchemaListDiff,
    ServerDiff,
    StringsDiff,
    TagDiff,
    ValueDiff,
    VariableDiff,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    Parser = Callable[[Any, str], Any]

logger = logging.getLogger(__name__)


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _mapping(data: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        msg = f"expected a mapping, got {type(data).__name__}"
        raise MalformedDiffTree(path or "<root>", msg)
    return data


def _list(data: Any, path: str) -> tuple[Any, ...]:
    if data is None:
        return ()
    if not isinstance(data, list | tuple):
        msg = f"expected a list, got {type(data).__name__}"
        raise MalformedDiffTree(path, msg)
    return tuple(data)


def _names(data: Any, path: str) -> tuple[str, ...]:
    return tuple(str(item) for item in _list(data, path))


def _value(data: Any, path: str) -> ValueDiff | None:
    if data is None:
        return None
    m = _mapping(data, path)
    return ValueDiff(from_value=m.get("from"), to_value=m.get("to"))


def _flag(data: Any, path: str) -> bool:
    """Flag-only diffs: present and non-empty means changed."""
    return bool(data)


def _strings(data: Any, path: str) -> StringsDiff | None:
    if data is None:
        return None
    m = _mapping(data, path)
    return StringsDiff(
        added=_list(m.get("added"), _join(path, "added")),
        deleted=_list(m.get("deleted"), _join(path, "deleted")),
    )


def _collection(item: Parser) -> Parser:
    """Build a parser for an added/deleted/modified collection of *item* diffs."""

    def parse(data: Any, path: str) -> CollectionDiff[Any] | None:
        if data is None:
            return None
        m = _mapping(data, path)
        modified_path = _join(path, "modified")
        modified = _mapping(m.get("modified") or {}, modified_path)
        return CollectionDiff(
            added=_names(m.get("added"), _join(path, "added")),
            deleted=_names(m.get("deleted"), _join(path, "deleted")),
            modified={
                str(key): item(value, _join(modified_path, str(key)))
                for key, value in modified.items()
            },
        )

    return parse


def _composite(cls: type, layout: tuple[tuple[str, str, Parser], ...]) -> Parser:
    """Build a parser for a composite diff from (key, attribute, parser) triples."""

    def parse(data: Any, path: str) -> Any:
        if data is None:
            return None
        m = _mapping(data, path)
        kwargs = {
            attr: parser(m.get(key), _join(path, key))
            for key, attr, parser in layout
            if key in m
        }
        return cls(**kwargs)

    return parse


def _security_scopes(data: Any, path: str) -> dict[str, StringsDiff]:
    m = _mapping(data or {}, path)
    return {
        str(scheme): _strings(value, _join(path, str(scheme))) or StringsDiff()
        for scheme, value in m.items()
    }


def _count(data: Any, path: str) -> int:
    if data is None:
        return 0
    if isinstance(data, bool) or not isinstance(data, int) or data < 0:
        msg = f"expected a non-negative count, got {data!r}"
        raise MalformedDiffTree(path, msg)
    return data


def _schema_list(data: Any, path: str) -> SchemaListDiff | None:
    if data is None:
        return None
    m = _mapping(data, path)
    modified_path = _join(path, "modified")
    modified = _mapping(m.get("modified") or {}, modified_path)
    return SchemaListDiff(
        added=_count(m.get("added"), _join(path, "added")),
        deleted=_count(m.get("deleted"), _join(path, "deleted")),
        modified={
            str(ref): _schema(value, _join(modified_path, str(ref)))
            for ref, value in modified.items()
        },
    )


def _schema(data: Any, path: str) -> SchemaDiff | None:
    return _parse_schema(data, path)


_extensions = _collection(_value)
_examples = _collection(
    _composite(
        ExampleDiff,
        (
            ("summary", "summary", _value),
            ("description", "description", _value),
            ("value", "value", _value),
            ("externalValue", "external_value", _value),
        ),
    )
)

_parse_schema: Parser = _composite(
    SchemaDiff,
    (
        ("schemaAdded", "schema_added", _flag),
        ("schemaDeleted", "schema_deleted", _flag),
        ("circularRef", "circular_ref_changed", _flag),
        ("oneOf", "one_of", _schema_list),
        ("anyOf", "any_of", _schema_list),
        ("allOf", "all_of", _schema_list),
        ("not", "not_", _schema),
        ("type", "type", _value),
        ("title", "title", _value),
        ("format", "format", _value),
        ("description", "description", _value),
        ("enum", "enum", _strings),
        ("default", "default", _value),
        ("example", "example", _value),
        ("additionalPropertiesAllowed", "additional_properties_allowed", _value),
        ("uniqueItems", "unique_items", _value),
        ("exclusiveMin", "exclusive_min", _value),
        ("exclusiveMax", "exclusive_max", _value),
        ("nullable", "nullable", _value),
        ("readOnly", "read_only", _value),
        ("writeOnly", "write_only", _value),
        ("allowEmptyValue", "allow_empty_value", _value),
        ("xml", "xml", _value),
        ("deprecated", "deprecated", _value),
        ("min", "min", _value),
        ("max", "max", _value),
        ("multipleOf", "multiple_of", _value),
        ("minLength", "min_length", _value),
        ("maxLength", "max_length", _value),
        ("pattern", "pattern", _value),
        ("minItems", "min_items", _value),
        ("maxItems", "max_items", _value),
        ("items", "items", _schema),
        ("required", "required", _strings),
        ("minProps", "min_props", _value),
        ("maxProps", "max_props", _value),
        ("properties", "properties", _collection(_schema)),
        ("additionalProperties", "additional_properties", _schema),
        ("discriminator", "discriminator_changed", _flag),
    ),
)

_media_types = _collection(
    _composite(
        MediaTypeDiff,
        (
            ("schema", "schema", _schema),
            ("example", "example", _value),
            ("examples", "examples", _examples),
            ("encoding", "encodings_changed", _flag),
        ),
    )
)

_headers = _collection(
    _composite(
        HeaderDiff,
        (
            ("description", "description", _value),
            ("deprecated", "deprecated", _value),
            ("required", "required", _value),
            ("example", "example", _value),
            ("examples", "examples", _examples),
            ("schema", "schema", _schema),
            ("content", "content", _media_types),
        ),
    )
)

_parameter = _composite(
    ParameterDiff,
    (
        ("description", "description", _value),
        ("style", "style", _value),
        ("explode", "explode", _value),
        ("allowEmptyValue", "allow_empty_value", _value),
        ("allowReserved", "allow_reserved", _value),
        ("deprecated", "deprecated", _value),
        ("required", "required", _value),
        ("schema", "schema", _schema),
        ("example", "example", _value),
        ("examples", "examples", _examples),
        ("content", "content", _media_types),
    ),
)


def _parameters(data: Any, path: str) -> ParametersDiff | None:
    if data is None:
        return None
    m = _mapping(data, path)

    def by_location(key: str) -> dict[str, tuple[str, ...]]:
        section = _mapping(m.get(key) or {}, _join(path, key))
        return {str(loc): _names(names, _join(_join(path, key), str(loc)))
                for loc, names in section.items()}

    modified_path = _join(path, "modified")
    modified: dict[str, dict[str, ParameterDiff]] = {}
    for loc, params in _mapping(m.get("modified") or {}, modified_path).items():
        loc_path = _join(modified_path, str(loc))
        modified[str(loc)] = {
            str(name): _parameter(value, _join(loc_path, str(name)))
            for name, value in _mapping(params or {}, loc_path).items()
        }

    return ParametersDiff(
        added=by_location("added"),
        deleted=by_location("deleted"),
        modified=modified,
    )


_variables = _collection(
    _composite(
        VariableDiff,
        (
            ("enum", "enum", _strings),
            ("default", "default", _value),
            ("description", "description", _value),
        ),
    )
)

_servers = _collection(
    _composite(
        ServerDiff,
        (
            ("added", "added", _flag),
            ("deleted", "deleted", _flag),
            ("url", "url", _value),
            ("description", "description", _value),
            ("variables", "variables", _variables),
        ),
    )
)

_security = _collection(_security_scopes)

_method = _composite(
    MethodDiff,
    (
        ("description", "description", _value),
        ("parameters", "parameters", _parameters),
        (
            "requestBody",
            "request_body",
            _composite(
                RequestBodyDiff,
                (
                    ("description", "description", _value),
                    ("content", "content", _media_types),
                ),
            ),
        ),
        (
            "responses",
            "responses",
            _collection(
                _composite(
                    ResponseDiff,
                    (
                        ("description", "description", _value),
                        ("content", "content", _media_types),
                        ("headers", "headers", _headers),
                    ),
                )
            ),
        ),
        ("callbacks", "callbacks_changed", _flag),
        ("deprecated", "deprecated", _value),
        ("security", "security", _security),
        ("servers", "servers", _servers),
    ),
)

_paths = _collection(
    _composite(
        PathDiff,
        (
            ("extensions", "extensions", _extensions),
            ("ref", "ref", _value),
            ("summary", "summary", _value),
            ("description", "description", _value),
            ("operations", "operations", _collection(_method)),
            ("servers", "servers", _servers),
            ("parameters", "parameters", _parameters),
        ),
    )
)


def _endpoint(data: Any, path: str) -> Endpoint:
    if isinstance(data, str):
        method, sep, route = data.partition(" ")
        if not sep or not route:
            msg = f"expected 'METHOD /path', got {data!r}"
            raise MalformedDiffTree(path, msg)
        return Endpoint(method=method, path=route)
    m = _mapping(data, path)
    if "method" not in m or "path" not in m:
        raise MalformedDiffTree(path, "endpoint requires 'method' and 'path'")
    return Endpoint(method=str(m["method"]), path=str(m["path"]))


def _endpoints(data: Any, path: str) -> EndpointsDiff | None:
    if data is None:
        return None
    m = _mapping(data, path)
    added_path = _join(path, "added")
    deleted_path = _join(path, "deleted")
    modified_path = _join(path, "modified")

    raw_modified = m.get("modified") or {}
    modified: dict[Endpoint, MethodDiff] = {}
    if isinstance(raw_modified, list):
        for i, entry in enumerate(raw_modified):
            entry_path = f"{modified_path}[{i}]"
            endpoint = _endpoint(entry, entry_path)
            modified[endpoint] = _method(_mapping(entry, entry_path).get("diff") or {}, entry_path)
    else:
        for key, value in _mapping(raw_modified, modified_path).items():
            entry_path = _join(modified_path, str(key))
            modified[_endpoint(str(key), entry_path)] = _method(value or {}, entry_path)

    return EndpointsDiff(
        added=tuple(
            _endpoint(e, f"{added_path}[{i}]") for i, e in enumerate(_list(m.get("added"), added_path))
        ),
        deleted=tuple(
            _endpoint(e, f"{deleted_path}[{i}]")
            for i, e in enumerate(_list(m.get("deleted"), deleted_path))
        ),
        modified=modified,
    )


_diff = _composite(
    Diff,
    (
        ("openAPI", "openapi", _value),
        (
            "info",
            "info",
            _composite(
                InfoDiff,
                (
                    ("extensions", "extensions", _extensions),
                    (
                        "contact",
                        "contact",
                        _composite(
                            ContactDiff,
                            (
                                ("added", "added", _flag),
                                ("deleted", "deleted", _flag),
                                ("extensions", "extensions", _extensions),
                                ("name", "name", _value),
                                ("url", "url", _value),
                                ("email", "email", _value),
                            ),
                        ),
                    ),
                    (
                        "license",
                        "license",
                        _composite(
                            LicenseDiff,
                            (
                                ("added", "added", _flag),
                                ("deleted", "deleted", _flag),
                                ("extensions", "extensions", _extensions),
                                ("name", "name", _value),
                                ("url", "url", _value),
                            ),
                        ),
                    ),
                    ("title", "title", _value),
                    ("description", "description", _value),
                    ("termsOfService", "terms_of_service", _value),
                    ("version", "version", _value),
                ),
            ),
        ),
        ("paths", "paths", _paths),
        ("endpoints", "endpoints", _endpoints),
        ("security", "security", _security),
        ("servers", "servers", _servers),
        (
            "tags",
            "tags",
            _collection(
                _composite(
                    TagDiff,
                    (
                        ("name", "name", _value),
                        ("description", "description", _value),
                    ),
                )
            ),
        ),
        (
            "externalDocs",
            "external_docs",
            _composite(
                ExternalDocsDiff,
                (
                    ("added", "added", _flag),
                    ("deleted", "deleted", _flag),
                    ("extensions", "extensions", _extensions),
                    ("description", "description", _value),
                    ("url", "url", _value),
                ),
            ),
        ),
    ),
)


def load_diff(data: Any) -> Diff:
    """Build a :class:`Diff` from a decoded YAML/JSON document.

    An empty document (``None`` or ``{}``) means the two versions are
    equivalent and yields an empty diff.

    Raises:
        MalformedDiffTree: If a node has the wrong container type.
    """
    if data is None:
        return Diff()
    return _diff(data, "")


def load_diff_file(path: Path) -> Diff:
    """Read and decode a diff document from *path*.

    Files ending in ``.json`` are parsed with :mod:`json`; everything else
    is parsed as YAML (a superset of JSON).

    Raises:
        OSError: If the file cannot be read.
        MalformedDiffTree: If the document cannot be parsed or has the wrong shape.
    """
    text = path.read_text(encoding="utf-8")
    logger.debug("loaded %d bytes from %s", len(text), path)
    try:
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise MalformedDiffTree("<root>", f"cannot parse {path.name}: {exc}") from exc
    return load_diff(data)
