"""CLI entry point for api-diff-report."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from api_diff_report.core.errors import MalformedDiffTree
from api_diff_report.core.loader import load_diff_file
from api_diff_report.core.models import OutputMode, Section
from api_diff_report.report.config import DEFAULT_SECTIONS, ReportConfig
from api_diff_report.report.dispatcher import render_report, render_sections

if TYPE_CHECKING:
    from api_diff_report.core.models import Diff
    from api_diff_report.output.base import Renderer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CHANGES = 1
EXIT_USAGE = 101
EXIT_READ_FAILED = 102
EXIT_MALFORMED = 103
EXIT_WRITE_FAILED = 106

app = typer.Typer(
    name="api-diff-report",
    help="Render an OpenAPI diff as a text report and flag breaking changes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from api_diff_report import __version__

        typer.echo(f"api-diff-report {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _parse_output_mode(value: str) -> OutputMode:
    """Parse output string to OutputMode enum."""
    try:
        return OutputMode(value)
    except ValueError:
        valid = ", ".join(o.value for o in OutputMode)
        msg = f"Invalid output mode '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _parse_sections(values: list[str] | None) -> tuple[Section, ...] | None:
    """Parse section names; None selects every section that has changes."""
    if not values:
        return None
    sections: list[Section] = []
    for value in values:
        try:
            sections.append(Section(value))
        except ValueError:
            valid = ", ".join(s.value for s in Section)
            msg = f"Invalid section '{value}'. Choose from: {valid}"
            raise typer.BadParameter(msg) from None
    return tuple(sections)


def _build_config(*, breaking_only: bool, sections: tuple[Section, ...] | None) -> ReportConfig:
    """Build ReportConfig from CLI flags."""
    return ReportConfig(
        breaking_only=breaking_only,
        sections=sections if sections is not None else DEFAULT_SECTIONS,
    )


def _get_renderer(output_mode: OutputMode) -> Renderer:
    """Get the appropriate renderer for the output mode."""
    if output_mode == OutputMode.rich:
        from api_diff_report.output.rich_output import RichRenderer

        return RichRenderer()
    if output_mode == OutputMode.json:
        from api_diff_report.output.json_output import JsonRenderer

        return JsonRenderer()
    if output_mode == OutputMode.yaml:
        from api_diff_report.output.yaml_output import YamlRenderer

        return YamlRenderer()
    if output_mode == OutputMode.html:
        from api_diff_report.output.html_output import HtmlRenderer

        return HtmlRenderer()
    if output_mode == OutputMode.diff:
        from api_diff_report.output.diff_output import DiffYamlRenderer

        return DiffYamlRenderer()

    from api_diff_report.output.text_output import TextRenderer

    return TextRenderer()


def _exit_code(diff: Diff) -> int:
    """Exit 0 when the two versions are equivalent and 1 when anything differs.

    The breaking classification is reported in the output, not the exit code.
    """
    return EXIT_OK if diff.is_empty() else EXIT_CHANGES


@app.command()
def main(
    diff_file: Annotated[
        Path,
        typer.Argument(help="Diff document (YAML or JSON) produced by comparing two API specs."),
    ],
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Output mode: text, rich, json, yaml, html, or diff (the diff tree as YAML).",
        ),
    ] = "text",
    section: Annotated[
        list[str] | None,
        typer.Option(
            "--section",
            "-s",
            help="Section(s) to render, e.g. info, endpoints-deleted. Defaults to all.",
        ),
    ] = None,
    breaking_only: Annotated[
        bool,
        typer.Option(
            "--breaking-only/--all-changes",
            help="Treat endpoint modifications as breaking changes.",
        ),
    ] = True,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Render a precomputed OpenAPI diff as an indented text report.

    Exits 0 when the two versions are equivalent and 1 when they differ.
    """
    _configure_logging(verbose)

    try:
        output_mode = _parse_output_mode(output)
        sections = _parse_sections(section)
    except typer.BadParameter as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_USAGE) from None

    config = _build_config(breaking_only=breaking_only, sections=sections)

    try:
        diff = load_diff_file(diff_file)
    except MalformedDiffTree as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_MALFORMED) from None
    except OSError as exc:
        typer.echo(f"Error: failed to read diff from '{diff_file}': {exc}", err=True)
        raise typer.Exit(code=EXIT_READ_FAILED) from None

    try:
        if sections is None:
            result = render_report(diff, config)
        else:
            result = render_sections(sections, diff, config)
    except MalformedDiffTree as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_MALFORMED) from None

    try:
        _get_renderer(output_mode).render(result)
    except OSError as exc:
        typer.echo(f"Error: failed to write report: {exc}", err=True)
        raise typer.Exit(code=EXIT_WRITE_FAILED) from None

    code = _exit_code(diff)
    logger.debug("exiting with code %d, breaking=%s", code, result.breaking)
    raise typer.Exit(code=code)
