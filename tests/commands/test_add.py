"""Tests for the ``add`` CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from slnctl.cli import cli
from tests.conftest import reload


@pytest.mark.usefixtures("_in_repo")
class TestAddCommand:
    def test_add_project(self, cli_runner: CliRunner, repo_root: Path) -> None:
        result = cli_runner.invoke(cli, ["add", "libs/Core/Core.csproj"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "libs/Core/Core.csproj" in result.output
        assert reload(repo_root).document.find_project("libs/Core/Core.csproj") is not None

    def test_add_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "add", "libs/sub/Deep"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "add_projects"
        assert data["data"]["added"][0]["folders"] == ["libs", "sub"]

    def test_add_quiet_prints_paths(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "add", "App", "tools/Gen"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["App/App.csproj", "tools/Gen/Gen.fsproj"]

    def test_add_twice_reports_unchanged(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["add", "App"])
        result = cli_runner.invoke(cli, ["add", "App"])
        assert result.exit_code == 0
        assert "already present" in result.output
        assert "solution unchanged" in result.output

    def test_add_in_root(self, cli_runner: CliRunner, repo_root: Path) -> None:
        result = cli_runner.invoke(cli, ["add", "--in-root", "libs/Core"])
        assert result.exit_code == 0
        assert reload(repo_root).document.folders == []

    def test_add_solution_folder(self, cli_runner: CliRunner, repo_root: Path) -> None:
        result = cli_runner.invoke(cli, ["add", "--solution-folder", "a/b", "libs/Core"])
        assert result.exit_code == 0
        doc = reload(repo_root).document
        core = doc.find_project("libs/Core/Core.csproj")
        assert core is not None
        assert doc.folder_chain(core) == ["a", "b"]

    def test_add_with_solution_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "add", "-s", "All.sln", "App"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["solution"].endswith("All.sln")

    def test_conflicting_placement(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add", "--in-root", "--solution-folder", "x", "App"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr

    def test_misplaced_solution_suggests_fix(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add", "All.sln", "App"])
        assert result.exit_code == 1
        assert "Did you mean" in result.stderr
        assert "slnctl add --solution All.sln App" in result.stderr

    def test_misplaced_solution_json_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "add", "All.sln", "App"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["ok"] is False
        assert payload["error"]["code"] == "SOLUTION_ARGUMENT_MISPLACED"

    def test_missing_path(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add", "nope"])
        assert result.exit_code == 1
        assert "Could not find project or directory" in result.stderr

    def test_no_projects(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add"])
        assert result.exit_code == 1
        assert "Specify at least one project" in result.stderr
