"""Tests for api_diff_report.cli.app."""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING, Any

import yaml
from typer.testing import CliRunner

from api_diff_report.cli import app as app_module
from api_diff_report.cli.app import app
from api_diff_report.output.text_output import TextRenderer

if TYPE_CHECKING:
    from pathlib import Path

    import pytest

runner = CliRunner()


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


class TestCliHelp:
    """Verify help output."""

    def test_help_flag(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "OpenAPI diff" in result.output

    def test_no_args_shows_usage(self) -> None:
        result = runner.invoke(app, [])
        assert "Usage" in result.output or "DIFF_FILE" in result.output


class TestCliVersion:
    """Verify version output."""

    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "api-diff-report" in result.output
        assert "0.1.0" in result.output

    def test_version_short_flag(self) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0


class TestCliReport:
    """Verify the rendered report and exit status."""

    def test_breaking_diff_exits_one(self, petstore_yaml: Path) -> None:
        result = runner.invoke(app, [str(petstore_yaml)])
        assert result.exit_code == 1
        assert "Endpoints Deleted" in result.stdout
        assert "GET /pets/{id}" in result.stdout

    def test_json_input(self, petstore_json: Path) -> None:
        result = runner.invoke(app, [str(petstore_json)])
        assert result.exit_code == 1

    def test_non_breaking_diff_exits_one(self, info_only_yaml: Path) -> None:
        result = runner.invoke(app, [str(info_only_yaml)])
        assert result.exit_code == 1
        assert "Description changed from null to 'Pets API'" in result.stdout

    def test_version_bump_exits_one(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "version.yaml", "info:\n  version: {from: '1', to: '2'}\n")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "Version changed from '1' to '2'" in result.stdout

    def test_all_changes_exits_one_on_any_change(self, info_only_yaml: Path) -> None:
        result = runner.invoke(app, [str(info_only_yaml), "--all-changes"])
        assert result.exit_code == 1

    def test_empty_document(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "empty.yaml", "{}\n")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert result.stdout == "No changes\n"

    def test_empty_document_all_changes(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "empty.yaml", "")
        result = runner.invoke(app, [str(path), "--all-changes"])
        assert result.exit_code == 0


class TestCliSections:
    """Verify section selection."""

    def test_single_section(self, petstore_yaml: Path) -> None:
        result = runner.invoke(app, [str(petstore_yaml), "--section", "info"])
        assert result.exit_code == 1
        assert result.stdout.splitlines() == [
            "Info Changed",
            "Title changed from 'Petstore' to 'Pet Store'",
            "Version changed from '1.0.0' to '2.0.0'",
        ]

    def test_repeated_sections(self, petstore_yaml: Path) -> None:
        result = runner.invoke(app, [str(petstore_yaml), "-s", "tag-added", "-s", "endpoints-deleted"])
        assert result.exit_code == 1
        assert result.stdout.splitlines() == [
            "Tag Added",
            "New tag: store",
            "Endpoints Deleted",
            "GET /pets/{id}",
            "",
        ]

    def test_invalid_section(self, petstore_yaml: Path) -> None:
        result = runner.invoke(app, [str(petstore_yaml), "--section", "bogus"])
        assert result.exit_code == 101


class TestCliOutputMode:
    """Verify output mode option."""

    def test_json(self, petstore_yaml: Path) -> None:
        result = runner.invoke(app, [str(petstore_yaml), "--output", "json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["breaking"] is True
        assert [s["section"] for s in data["sections"]][0] == "info"

    def test_yaml(self, info_only_yaml: Path) -> None:
        result = runner.invoke(app, [str(info_only_yaml), "-o", "yaml"])
        assert result.exit_code == 1
        assert "breaking: false" in result.stdout

    def test_html(self, info_only_yaml: Path) -> None:
        result = runner.invoke(app, [str(info_only_yaml), "-o", "html"])
        assert result.exit_code == 1
        assert "<!DOCTYPE html>" in result.stdout

    def test_rich(self, petstore_yaml: Path) -> None:
        result = runner.invoke(app, [str(petstore_yaml), "-o", "rich"])
        assert result.exit_code == 1
        assert "Breaking changes detected" in result.stdout

    def test_diff_tree(self, petstore_yaml: Path, petstore_document: dict[str, Any]) -> None:
        result = runner.invoke(app, [str(petstore_yaml), "-o", "diff"])
        assert result.exit_code == 1
        assert yaml.safe_load(result.stdout) == petstore_document

    def test_diff_tree_of_empty_document(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "empty.yaml", "{}\n")
        result = runner.invoke(app, [str(path), "-o", "diff"])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_invalid_output_mode(self, petstore_yaml: Path) -> None:
        result = runner.invoke(app, [str(petstore_yaml), "--output", "invalid"])
        assert result.exit_code == 101


class TestCliErrors:
    """Verify exit codes for unreadable or malformed input."""

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "missing.yaml")])
        assert result.exit_code == 102

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "bad.yaml", "tags:\n  added: store\n")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 103

    def test_unparsable(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "bad.json", "{")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 103

    def test_partition_violation(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "overlap.yaml", "tags:\n  added: [a]\n  modified:\n    a: {}\n")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 103

    def test_bad_schema_list_count(self, tmp_path: Path) -> None:
        text = (
            "paths:\n"
            "  modified:\n"
            "    /pets:\n"
            "      parameters:\n"
            "        modified:\n"
            "          query:\n"
            "            limit:\n"
            "              schema:\n"
            "                oneOf: {added: many}\n"
        )
        path = _write(tmp_path, "count.yaml", text)
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 103


class _BrokenPipe(io.StringIO):
    def write(self, s: str) -> int:
        raise BrokenPipeError(32, "Broken pipe")


class TestCliWriteFailure:
    """Verify output errors abort the run with their own exit code."""

    def test_write_failure(self, petstore_yaml: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "_get_renderer", lambda _mode: TextRenderer(_BrokenPipe()))
        result = runner.invoke(app, [str(petstore_yaml)])
        assert result.exit_code == 106
