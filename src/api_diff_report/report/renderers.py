"""Composite renderers for every diff shape in the tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api_diff_report.core.models import PARAM_LOCATIONS, Endpoint, is_empty
from api_diff_report.report.collection import (
    check_partition,
    render_added,
    render_collection,
    render_deleted,
    render_modified,
    sorted_keys,
)
from api_diff_report.report.config import ReportConfig
from api_diff_report.report.schema import render_enum, render_schema
from api_diff_report.report.values import format_list, render_flag, render_value

if TYPE_CHECKING:
    from collections.abc import Mapping

    from api_diff_report.core.models import (
        CollectionDiff,
        ContactDiff,
        EndpointsDiff,
        ExampleDiff,
        ExtensionsDiff,
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
        SecurityRequirementsDiff,
        SecurityScopesDiff,
        ServerDiff,
        TagDiff,
        ValueDiff,
        VariableDiff,
    )
    from api_diff_report.report.breaking import BreakingFlag
    from api_diff_report.report.writer import IndentWriter


def _endpoint_order(endpoints: Any) -> list[Endpoint]:
    return sorted(endpoints, key=Endpoint.sort_key)


class TextReport:
    """Renders diff nodes as indented lines.

    A report pairs a writer at some depth with the breaking flag of the
    current run. :meth:`indent` returns a report one level deeper that
    shares the same flag and configuration; the receiver is never changed.

    Each ``render_*`` method inspects a fixed list of fields in a fixed
    order and emits nothing for an empty diff.
    """

    def __init__(
        self,
        writer: IndentWriter,
        breaking: BreakingFlag,
        config: ReportConfig | None = None,
    ) -> None:
        self._writer = writer
        self._breaking = breaking
        self._config = config or ReportConfig()

    @property
    def depth(self) -> int:
        return self._writer.depth

    @property
    def breaking(self) -> BreakingFlag:
        return self._breaking

    def indent(self) -> TextReport:
        """Return a report one indentation level deeper."""
        return TextReport(self._writer.child(), self._breaking, self._config)

    def print(self, *fields: Any) -> None:
        self._writer.emit(*fields)

    def value(self, diff: ValueDiff | None, label: str) -> None:
        render_value(self._writer, diff, label)

    def flag(self, condition: bool, *fields: Any) -> None:
        render_flag(self._writer, condition, *fields)

    def title(self, title: str, count: int) -> None:
        """Print a ``### title: count`` heading with an underline."""
        text = f"### {title}: {count if count else 'None'}"
        self.print(text)
        self.print("-" * len(text))

    # -- Info ---------------------------------------------------------------

    def render_info(self, d: InfoDiff | None) -> None:
        if is_empty(d):
            return
        self.render_contact(d.contact)
        self.render_license(d.license)
        self.value(d.title, "Title")
        self.value(d.description, "Description")
        self.value(d.terms_of_service, "Terms Of Service")
        self.value(d.version, "Version")
        self.render_extensions(d.extensions, field="info.extensions")

    def render_contact(self, d: ContactDiff | None) -> None:
        if is_empty(d):
            return
        self.flag(d.added, "Contact added")
        self.flag(d.deleted, "Contact deleted")
        self.value(d.name, "Contact name")
        self.value(d.url, "Contact URL")
        self.value(d.email, "Contact email")
        self.render_extensions(d.extensions, field="info.contact.extensions")

    def render_license(self, d: LicenseDiff | None) -> None:
        if is_empty(d):
            return
        self.flag(d.added, "License added")
        self.flag(d.deleted, "License deleted")
        self.value(d.name, "License name")
        self.value(d.url, "License URL")
        self.render_extensions(d.extensions, field="info.license.extensions")

    def render_extensions(self, d: ExtensionsDiff | None, *, field: str = "extensions") -> None:
        render_collection(
            self,
            d,
            "extension",
            lambda report, value: report.value(value, "Extension"),
            field=field,
        )

    # -- Paths and operations ------------------------------------------------

    def render_paths(self, d: CollectionDiff[PathDiff] | None) -> None:
        render_collection(self, d, "path", TextReport.render_path, field="paths")

    def render_path(self, d: PathDiff | None) -> None:
        if is_empty(d):
            return
        self.render_extensions(d.extensions, field="path.extensions")
        self.value(d.ref, "Reference")
        self.value(d.summary, "Summary")
        self.value(d.description, "Description")
        render_collection(
            self, d.operations, "operation", TextReport.render_method, field="path.operations"
        )
        self.render_servers(d.servers)
        self.render_parameters(d.parameters)

    def render_method(self, d: MethodDiff | None) -> None:
        if is_empty(d):
            return

        self.value(d.description, "Description")
        self.render_parameters(d.parameters)

        if not is_empty(d.request_body):
            self.print("Request body changed")
            self.indent().render_request_body(d.request_body)

        if not is_empty(d.responses):
            self.print("Responses changed")
            self.indent().render_responses(d.responses)

        self.flag(d.callbacks_changed, "Callbacks changed")
        self.value(d.deprecated, "Deprecated")

        if not is_empty(d.security):
            self.print("Security changed")
            self.indent().render_security_requirements(d.security)

        if not is_empty(d.servers):
            self.print("Servers changed")
            self.indent().render_servers(d.servers)

    # -- Parameters ----------------------------------------------------------

    @staticmethod
    def _locations(d: ParametersDiff) -> list[str]:
        """Known locations in fixed order, then any others sorted."""
        seen = set(d.added) | set(d.deleted) | set(d.modified)
        extra = sorted(str(loc) for loc in seen if loc not in PARAM_LOCATIONS)
        return [str(loc) for loc in PARAM_LOCATIONS] + extra

    def render_parameters(self, d: ParametersDiff | None) -> None:
        if is_empty(d):
            return

        locations = self._locations(d)
        for loc in locations:
            check_partition(
                f"parameters.{loc}",
                d.added.get(loc, ()),
                d.deleted.get(loc, ()),
                d.modified.get(loc, {}),
            )

        for loc in locations:
            render_added(self, d.added.get(loc, ()), f"{loc} param")
        for loc in locations:
            render_deleted(self, d.deleted.get(loc, ()), f"{loc} param")
        for loc in locations:
            render_modified(self, d.modified.get(loc, {}), f"{loc} param", TextReport.render_parameter)

    def render_parameter(self, d: ParameterDiff | None) -> None:
        if is_empty(d):
            return

        self.value(d.description, "Description")
        self.value(d.style, "Style")
        self.value(d.explode, "Explode")
        self.value(d.allow_empty_value, "AllowEmptyValue")
        self.value(d.allow_reserved, "AllowReserved")
        self.value(d.deprecated, "Deprecated")
        self.value(d.required, "Required")

        if not is_empty(d.schema):
            self.print("Schema changed")
            self.indent().render_schema(d.schema)

        self.value(d.example, "Example")

        if not is_empty(d.examples):
            self.print("Examples changed")
            self.indent().render_examples(d.examples)

        if not is_empty(d.content):
            self.print("Content changed")
            self.indent().render_content(d.content)

    def render_schema(self, d: SchemaDiff | None) -> None:
        render_schema(self, d)

    # -- Bodies, responses and media types -----------------------------------

    def render_request_body(self, d: RequestBodyDiff | None) -> None:
        if is_empty(d):
            return
        self.value(d.description, "Description")
        if not is_empty(d.content):
            self.print("Content changed")
            self.indent().render_content(d.content)

    def render_responses(self, d: CollectionDiff[ResponseDiff] | None) -> None:
        render_collection(self, d, "response", TextReport.render_response, field="responses")

    def render_response(self, d: ResponseDiff | None) -> None:
        if is_empty(d):
            return
        self.value(d.description, "Description")
        if not is_empty(d.content):
            self.print("Content changed")
            self.indent().render_content(d.content)
        if not is_empty(d.headers):
            self.print("Headers changed")
            self.indent().render_headers(d.headers)

    def render_content(self, d: CollectionDiff[MediaTypeDiff] | None) -> None:
        render_collection(self, d, "media type", TextReport.render_media_type, field="content")

    def render_media_type(self, d: MediaTypeDiff | None) -> None:
        if is_empty(d):
            return
        if not is_empty(d.schema):
            self.print("Schema changed")
            self.indent().render_schema(d.schema)
        self.value(d.example, "Example")
        if not is_empty(d.examples):
            self.print("Examples changed")
            self.indent().render_examples(d.examples)
        self.flag(d.encodings_changed, "Encodings changed")

    def render_headers(self, d: CollectionDiff[HeaderDiff] | None) -> None:
        render_collection(self, d, "header", TextReport.render_header, field="headers")

    def render_header(self, d: HeaderDiff | None) -> None:
        if is_empty(d):
            return
        self.value(d.description, "Description")
        self.value(d.deprecated, "Deprecated")
        self.value(d.required, "Required")
        self.value(d.example, "Example")
        if not is_empty(d.examples):
            self.print("Examples changed")
            self.indent().render_examples(d.examples)
        if not is_empty(d.schema):
            self.print("Schema changed")
            self.indent().render_schema(d.schema)
        if not is_empty(d.content):
            self.print("Content changed")
            self.indent().render_content(d.content)

    def render_examples(self, d: CollectionDiff[ExampleDiff] | None) -> None:
        render_collection(self, d, "example", TextReport.render_example, field="examples")

    def render_example(self, d: ExampleDiff | None) -> None:
        if is_empty(d):
            return
        self.value(d.summary, "Summary")
        self.value(d.description, "Description")
        self.value(d.value, "Value")
        self.value(d.external_value, "ExternalValue")

    # -- Servers -------------------------------------------------------------

    def render_servers(self, d: CollectionDiff[ServerDiff] | None) -> None:
        render_collection(self, d, "server", TextReport.render_server, field="servers")

    def render_server(self, d: ServerDiff | None) -> None:
        if is_empty(d):
            return
        self.flag(d.added, "Server added")
        self.flag(d.deleted, "Server deleted")
        self.value(d.url, "URL")
        self.value(d.description, "Description")
        if not is_empty(d.variables):
            self.print("Variables changed")
            render_collection(
                self.indent(),
                d.variables,
                "variable",
                TextReport.render_variable,
                field="server.variables",
            )

    def render_variable(self, d: VariableDiff | None) -> None:
        if is_empty(d):
            return
        render_enum(self, d.enum)
        self.value(d.default, "Default")
        self.value(d.description, "Description")

    # -- Tags and external docs ----------------------------------------------

    def render_tags(self, d: CollectionDiff[TagDiff] | None) -> None:
        render_collection(self, d, "tag", TextReport.render_tag, field="tags")

    def render_tag(self, d: TagDiff | None) -> None:
        if is_empty(d):
            return
        self.value(d.name, "Name")
        self.value(d.description, "Description")

    def render_external_docs(self, d: ExternalDocsDiff | None) -> None:
        if is_empty(d):
            return
        self.flag(d.added, "External Docs added")
        self.flag(d.deleted, "External Docs deleted")
        self.render_extensions(d.extensions, field="externalDocs.extensions")
        self.value(d.description, "External Docs description")
        self.value(d.url, "External Docs URL")

    # -- Security (breaking) -------------------------------------------------

    def _security_entry(self, name: str) -> None:
        self._breaking.mark(f"security requirement changed: {name}")

    def render_security_requirements(self, d: SecurityRequirementsDiff | None) -> None:
        """Render security requirement changes; every entry is breaking."""
        render_collection(
            self,
            d,
            "security requirement",
            TextReport.render_security_scopes,
            field="security",
            on_entry=self._security_entry,
        )

    def render_security_added(self, d: SecurityRequirementsDiff | None) -> None:
        if is_empty(d):
            return
        check_partition("security", d.added, d.deleted, d.modified)
        render_added(self, d.added, "security requirement", self._security_entry)

    def render_security_deleted(self, d: SecurityRequirementsDiff | None) -> None:
        if is_empty(d):
            return
        check_partition("security", d.added, d.deleted, d.modified)
        render_deleted(self, d.deleted, "security requirement", self._security_entry)

    def render_security_modified(self, d: SecurityRequirementsDiff | None) -> None:
        if is_empty(d):
            return
        check_partition("security", d.added, d.deleted, d.modified)
        render_modified(
            self,
            d.modified,
            "security requirement",
            TextReport.render_security_scopes,
            self._security_entry,
        )

    def render_security_scopes(self, d: SecurityScopesDiff | Mapping[str, Any]) -> None:
        for scheme in sorted_keys(d):
            scopes = d[scheme]
            if is_empty(scopes):
                continue
            self.flag(
                bool(scopes.added), "Scheme", scheme, "Added scopes:", format_list(sorted(scopes.added))
            )
            self.flag(
                bool(scopes.deleted),
                "Scheme",
                scheme,
                "Deleted scopes:",
                format_list(sorted(scopes.deleted)),
            )

    # -- Collection slices used by top-level sections ------------------------

    def render_servers_added(self, d: CollectionDiff[ServerDiff] | None) -> None:
        if is_empty(d):
            return
        check_partition("servers", d.added, d.deleted, d.modified)
        render_added(self, d.added, "server")

    def render_servers_deleted(self, d: CollectionDiff[ServerDiff] | None) -> None:
        if is_empty(d):
            return
        check_partition("servers", d.added, d.deleted, d.modified)
        render_deleted(self, d.deleted, "server")

    def render_servers_modified(self, d: CollectionDiff[ServerDiff] | None) -> None:
        if is_empty(d):
            return
        check_partition("servers", d.added, d.deleted, d.modified)
        render_modified(self, d.modified, "server", TextReport.render_server)

    def render_tags_added(self, d: CollectionDiff[TagDiff] | None) -> None:
        if is_empty(d):
            return
        check_partition("tags", d.added, d.deleted, d.modified)
        render_added(self, d.added, "tag")

    def render_tags_deleted(self, d: CollectionDiff[TagDiff] | None) -> None:
        if is_empty(d):
            return
        check_partition("tags", d.added, d.deleted, d.modified)
        render_deleted(self, d.deleted, "tag")

    def render_tags_modified(self, d: CollectionDiff[TagDiff] | None) -> None:
        if is_empty(d):
            return
        check_partition("tags", d.added, d.deleted, d.modified)
        render_modified(self, d.modified, "tag", TextReport.render_tag)

    # -- Endpoints -----------------------------------------------------------

    def render_endpoints_added(self, d: EndpointsDiff | None) -> None:
        if is_empty(d):
            return
        check_partition("endpoints", d.added, d.deleted, d.modified)
        if not d.added:
            return
        self.title("New Endpoints", len(d.added))
        for endpoint in _endpoint_order(d.added):
            self.print(endpoint.method, endpoint.path)
        self.print("")

    def render_endpoint_deleted(self, endpoint: Endpoint) -> None:
        """Print one deleted endpoint; deleting an endpoint is always breaking."""
        self._breaking.mark(f"endpoint deleted: {endpoint}")
        self.print(endpoint.method, endpoint.path)

    def render_endpoints_deleted(self, d: EndpointsDiff | None) -> None:
        if is_empty(d):
            return
        check_partition("endpoints", d.added, d.deleted, d.modified)
        if not d.deleted:
            return
        for endpoint in _endpoint_order(d.deleted):
            self.render_endpoint_deleted(endpoint)
        self.print("")

    def render_endpoint_modified(self, endpoint: Endpoint, d: MethodDiff) -> None:
        """Print a modified endpoint and its method diff one level deeper.

        Counts as breaking only when the run is in breaking-only mode.
        """
        if self._config.breaking_only:
            self._breaking.mark(f"endpoint modified: {endpoint}")
        self.print(endpoint.method, endpoint.path)
        self.indent().render_method(d)

    def render_endpoints_modified(self, d: EndpointsDiff | None) -> None:
        if is_empty(d):
            return
        check_partition("endpoints", d.added, d.deleted, d.modified)
        if not d.modified:
            return
        for endpoint in _endpoint_order(d.modified):
            self.render_endpoint_modified(endpoint, d.modified[endpoint])
        self.print("")
