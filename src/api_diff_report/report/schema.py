"""Schema diff rendering.

Schemas nest schemas (``not``, ``items``, ``properties``,
``additionalProperties`` and the ``oneOf``/``anyOf``/``allOf`` lists), so
this is the deepest recursion in a report. Circular references never reach
the renderer as structure; only the precomputed flag is printed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from api_diff_report.core.models import is_empty
from api_diff_report.report.collection import render_collection, sorted_keys
from api_diff_report.report.values import format_list

if TYPE_CHECKING:
    from api_diff_report.core.models import SchemaDiff, SchemaListDiff, StringsDiff
    from api_diff_report.report.renderers import TextReport

# Scalar attributes printed between the enum and items blocks, in order.
_SCALAR_FIELDS: tuple[tuple[str, str], ...] = (
    ("default", "Default"),
    ("example", "Example"),
    ("additional_properties_allowed", "AdditionalProperties"),
    ("unique_items", "UniqueItems"),
    ("exclusive_min", "ExclusiveMin"),
    ("exclusive_max", "ExclusiveMax"),
    ("nullable", "Nullable"),
    ("read_only", "ReadOnly"),
    ("write_only", "WriteOnly"),
    ("allow_empty_value", "AllowEmptyValue"),
    ("xml", "XML"),
    ("deprecated", "Deprecated"),
    ("min", "Min"),
    ("max", "Max"),
    ("multiple_of", "MultipleOf"),
    ("min_length", "MinLength"),
    ("max_length", "MaxLength"),
    ("pattern", "Pattern"),
    ("min_items", "MinItems"),
    ("max_items", "MaxItems"),
)


def render_schema(report: TextReport, d: SchemaDiff | None) -> None:
    """Render a schema diff, fields strictly in schema order."""
    if is_empty(d):
        return

    report.flag(d.schema_added, "Schema added")
    report.flag(d.schema_deleted, "Schema deleted")
    report.flag(d.circular_ref_changed, "Schema circular reference changed")

    for label, list_diff in (("OneOf", d.one_of), ("AnyOf", d.any_of), ("AllOf", d.all_of)):
        if not is_empty(list_diff):
            report.print(f"Property '{label}' changed")
            render_schema_list(report.indent(), list_diff)

    if not is_empty(d.not_):
        report.print("Property 'Not' changed")
        render_schema(report.indent(), d.not_)

    report.value(d.type, "Type")
    report.value(d.title, "Title")
    report.value(d.format, "Format")
    report.value(d.description, "Description")

    render_enum(report, d.enum)

    for attr, label in _SCALAR_FIELDS:
        report.value(getattr(d, attr), label)

    if not is_empty(d.items):
        report.print("Items changed")
        render_schema(report.indent(), d.items)

    if not is_empty(d.required):
        report.print("Required changed")
        render_required(report.indent(), d.required)

    report.value(d.min_props, "MinProps")
    report.value(d.max_props, "MaxProps")

    if not is_empty(d.properties):
        report.print("Properties changed")
        render_collection(
            report.indent(), d.properties, "property", render_schema, field="schema.properties"
        )

    if not is_empty(d.additional_properties):
        report.print("AdditionalProperties changed")
        render_schema(report.indent(), d.additional_properties)

    report.flag(d.discriminator_changed, "Discriminator changed")


def render_schema_list(report: TextReport, d: SchemaListDiff | None) -> None:
    """Render oneOf/anyOf/allOf changes.

    List members have no names, so additions and deletions are counts and
    modified members are identified by their schema reference.
    """
    if is_empty(d):
        return
    report.flag(d.added > 0, d.added, "schemas added")
    report.flag(d.deleted > 0, d.deleted, "schemas deleted")
    for ref in sorted_keys(d.modified):
        report.print("Schema", ref, "modified")
        render_schema(report.indent(), d.modified[ref])


def render_enum(report: TextReport, d: StringsDiff | None) -> None:
    """Render enum value changes in source order."""
    if is_empty(d):
        return
    report.flag(bool(d.added), "New enum values:", format_list(d.added))
    report.flag(bool(d.deleted), "Deleted enum values:", format_list(d.deleted))


def render_required(report: TextReport, d: StringsDiff | None) -> None:
    if is_empty(d):
        return
    for name in sorted(str(n) for n in d.added):
        report.print("New required property:", name)
    for name in sorted(str(n) for n in d.deleted):
        report.print("Deleted required property:", name)
