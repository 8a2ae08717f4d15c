"""Data models for OpenAPI difference trees.

Every diff shape is a frozen dataclass exposing ``is_empty()``. Optional
sub-diffs default to ``None``; the module-level :func:`is_empty` treats
``None`` as an empty node so callers never need to distinguish the two.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Mapping

T = TypeVar("T")


class OutputMode(StrEnum):
    """Output format for rendering reports."""

    text = "text"
    rich = "rich"
    json = "json"
    yaml = "yaml"
    html = "html"
    diff = "diff"


class Section(StrEnum):
    """Top-level report section selecting one renderer."""

    overall = "overall"
    info = "info"
    paths = "paths"
    endpoints_added = "endpoints-added"
    endpoints_deleted = "endpoints-deleted"
    endpoints_modified = "endpoints-modified"
    security_added = "security-added"
    security_deleted = "security-deleted"
    security_modified = "security-modified"
    server_added = "server-added"
    server_deleted = "server-deleted"
    server_modified = "server-modified"
    tag_added = "tag-added"
    tag_deleted = "tag-deleted"
    tag_modified = "tag-modified"
    external_docs = "external-docs"


class ParamLocation(StrEnum):
    """Location of an operation parameter."""

    path = "path"
    query = "query"
    header = "header"
    cookie = "cookie"


# Report order for parameter locations.
PARAM_LOCATIONS: tuple[ParamLocation, ...] = (
    ParamLocation.path,
    ParamLocation.query,
    ParamLocation.header,
    ParamLocation.cookie,
)


def is_empty(node: Any) -> bool:
    """Return True if *node* is None or reports itself as empty."""
    return node is None or node.is_empty()


class _Composite:
    """Emptiness for composites: every flag is False and every sub-diff empty."""

    def is_empty(self) -> bool:
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, bool):
                if value:
                    return False
            elif not is_empty(value):
                return False
        return True


@dataclass(frozen=True)
class ValueDiff:
    """A single scalar attribute that changed between the two versions."""

    from_value: Any
    to_value: Any

    def is_empty(self) -> bool:
        return type(self.from_value) is type(self.to_value) and self.from_value == self.to_value


@dataclass(frozen=True)
class StringsDiff:
    """Plain added/deleted value lists (enum values, scopes, required properties)."""

    added: tuple[Any, ...] = ()
    deleted: tuple[Any, ...] = ()

    def is_empty(self) -> bool:
        return not self.added and not self.deleted


@dataclass(frozen=True)
class CollectionDiff(Generic[T]):
    """Added/deleted/modified partition over a keyed set of named entries.

    ``modified`` maps each identifier to the nested diff of that entry.
    Identifiers in ``modified`` never also appear in ``added`` or ``deleted``.
    """

    added: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()
    modified: Mapping[str, T] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.added and not self.deleted and not self.modified


@dataclass(frozen=True)
class ParametersDiff:
    """Parameter changes keyed by location first, then by parameter name."""

    added: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    deleted: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    modified: Mapping[str, Mapping[str, ParameterDiff]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return (
            not any(self.added.values())
            and not any(self.deleted.values())
            and not any(self.modified.values())
        )


@dataclass(frozen=True)
class SchemaListDiff:
    """Changes to a oneOf/anyOf/allOf list, matched by schema reference."""

    added: int = 0
    deleted: int = 0
    modified: Mapping[str, SchemaDiff] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return self.added == 0 and self.deleted == 0 and not self.modified


# Named collection shapes.
ExtensionsDiff = CollectionDiff[ValueDiff]
SecurityScopesDiff = dict[str, StringsDiff]
SecurityRequirementsDiff = CollectionDiff[SecurityScopesDiff]


@dataclass(frozen=True)
class ContactDiff(_Composite):
    added: bool = False
    deleted: bool = False
    extensions: ExtensionsDiff | None = None
    name: ValueDiff | None = None
    url: ValueDiff | None = None
    email: ValueDiff | None = None


@dataclass(frozen=True)
class LicenseDiff(_Composite):
    added: bool = False
    deleted: bool = False
    extensions: ExtensionsDiff | None = None
    name: ValueDiff | None = None
    url: ValueDiff | None = None


@dataclass(frozen=True)
class InfoDiff(_Composite):
    extensions: ExtensionsDiff | None = None
    contact: ContactDiff | None = None
    license: LicenseDiff | None = None
    title: ValueDiff | None = None
    description: ValueDiff | None = None
    terms_of_service: ValueDiff | None = None
    version: ValueDiff | None = None


@dataclass(frozen=True)
class ExternalDocsDiff(_Composite):
    added: bool = False
    deleted: bool = False
    extensions: ExtensionsDiff | None = None
    description: ValueDiff | None = None
    url: ValueDiff | None = None


@dataclass(frozen=True)
class TagDiff(_Composite):
    name: ValueDiff | None = None
    description: ValueDiff | None = None


@dataclass(frozen=True)
class VariableDiff(_Composite):
    enum: StringsDiff | None = None
    default: ValueDiff | None = None
    description: ValueDiff | None = None


@dataclass(frozen=True)
class ServerDiff(_Composite):
    added: bool = False
    deleted: bool = False
    url: ValueDiff | None = None
    description: ValueDiff | None = None
    variables: CollectionDiff[VariableDiff] | None = None


@dataclass(frozen=True)
class ExampleDiff(_Composite):
    summary: ValueDiff | None = None
    description: ValueDiff | None = None
    value: ValueDiff | None = None
    external_value: ValueDiff | None = None


@dataclass(frozen=True)
class SchemaDiff(_Composite):
    """Changes to a schema object.

    Circular references are resolved upstream and surface only as the
    ``circular_ref_changed`` flag; the tree itself is always finite.
    """

    schema_added: bool = False
    schema_deleted: bool = False
    circular_ref_changed: bool = False
    one_of: SchemaListDiff | None = None
    any_of: SchemaListDiff | None = None
    all_of: SchemaListDiff | None = None
    not_: SchemaDiff | None = None
    type: ValueDiff | None = None
    title: ValueDiff | None = None
    format: ValueDiff | None = None
    description: ValueDiff | None = None
    enum: StringsDiff | None = None
    default: ValueDiff | None = None
    example: ValueDiff | None = None
    additional_properties_allowed: ValueDiff | None = None
    unique_items: ValueDiff | None = None
    exclusive_min: ValueDiff | None = None
    exclusive_max: ValueDiff | None = None
    nullable: ValueDiff | None = None
    read_only: ValueDiff | None = None
    write_only: ValueDiff | None = None
    allow_empty_value: ValueDiff | None = None
    xml: ValueDiff | None = None
    deprecated: ValueDiff | None = None
    min: ValueDiff | None = None
    max: ValueDiff | None = None
    multiple_of: ValueDiff | None = None
    min_length: ValueDiff | None = None
    max_length: ValueDiff | None = None
    pattern: ValueDiff | None = None
    min_items: ValueDiff | None = None
    max_items: ValueDiff | None = None
    items: SchemaDiff | None = None
    required: StringsDiff | None = None
    min_props: ValueDiff | None = None
    max_props: ValueDiff | None = None
    properties: CollectionDiff[SchemaDiff] | None = None
    additional_properties: SchemaDiff | None = None
    discriminator_changed: bool = False


@dataclass(frozen=True)
class MediaTypeDiff(_Composite):
    schema: SchemaDiff | None = None
    example: ValueDiff | None = None
    examples: CollectionDiff[ExampleDiff] | None = None
    encodings_changed: bool = False


@dataclass(frozen=True)
class HeaderDiff(_Composite):
    description: ValueDiff | None = None
    deprecated: ValueDiff | None = None
    required: ValueDiff | None = None
    example: ValueDiff | None = None
    examples: CollectionDiff[ExampleDiff] | None = None
    schema: SchemaDiff | None = None
    content: CollectionDiff[MediaTypeDiff] | None = None


@dataclass(frozen=True)
class ParameterDiff(_Composite):
    description: ValueDiff | None = None
    style: ValueDiff | None = None
    explode: ValueDiff | None = None
    allow_empty_value: ValueDiff | None = None
    allow_reserved: ValueDiff | None = None
    deprecated: ValueDiff | None = None
    required: ValueDiff | None = None
    schema: SchemaDiff | None = None
    example: ValueDiff | None = None
    examples: CollectionDiff[ExampleDiff] | None = None
    content: CollectionDiff[MediaTypeDiff] | None = None


@dataclass(frozen=True)
class RequestBodyDiff(_Composite):
    description: ValueDiff | None = None
    content: CollectionDiff[MediaTypeDiff] | None = None


@dataclass(frozen=True)
class ResponseDiff(_Composite):
    description: ValueDiff | None = None
    content: CollectionDiff[MediaTypeDiff] | None = None
    headers: CollectionDiff[HeaderDiff] | None = None


@dataclass(frozen=True)
class MethodDiff(_Composite):
    description: ValueDiff | None = None
    parameters: ParametersDiff | None = None
    request_body: RequestBodyDiff | None = None
    responses: CollectionDiff[ResponseDiff] | None = None
    callbacks_changed: bool = False
    deprecated: ValueDiff | None = None
    security: SecurityRequirementsDiff | None = None
    servers: CollectionDiff[ServerDiff] | None = None


@dataclass(frozen=True)
class PathDiff(_Composite):
    extensions: ExtensionsDiff | None = None
    ref: ValueDiff | None = None
    summary: ValueDiff | None = None
    description: ValueDiff | None = None
    operations: CollectionDiff[MethodDiff] | None = None
    servers: CollectionDiff[ServerDiff] | None = None
    parameters: ParametersDiff | None = None


@dataclass(frozen=True)
class Endpoint:
    """An operation identified by HTTP method and path."""

    method: str
    path: str

    def sort_key(self) -> tuple[str, str]:
        """Endpoints sort by path first, then by method."""
        return (self.path, self.method)

    def __str__(self) -> str:
        return f"{self.method} {self.path}"


@dataclass(frozen=True)
class EndpointsDiff:
    """Endpoint-level view of the path changes."""

    added: tuple[Endpoint, ...] = ()
    deleted: tuple[Endpoint, ...] = ()
    modified: Mapping[Endpoint, MethodDiff] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.added and not self.deleted and not self.modified


@dataclass(frozen=True)
class Diff(_Composite):
    """Root of the difference tree between two OpenAPI documents."""

    openapi: ValueDiff | None = None
    info: InfoDiff | None = None
    paths: CollectionDiff[PathDiff] | None = None
    endpoints: EndpointsDiff | None = None
    security: SecurityRequirementsDiff | None = None
    servers: CollectionDiff[ServerDiff] | None = None
    tags: CollectionDiff[TagDiff] | None = None
    external_docs: ExternalDocsDiff | None = None
