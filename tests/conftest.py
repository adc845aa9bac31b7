"""Shared pytest fixtures and test helpers for slnctl tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from slnctl.config.settings import SlnSettings
from slnctl.domain.solution import SolutionDocument
from slnctl.infrastructure.slnfile import SlnFile, load_solution, new_solution_text

CSPROJ = '<Project Sdk="Microsoft.NET.Sdk">\n</Project>\n'


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary repository with an empty ``All.sln`` and a few projects.

    Layout::

        All.sln
        App/App.csproj
        libs/Core/Core.csproj
        libs/sub/Deep/Deep.csproj
        tools/Gen/Gen.fsproj
    """
    monkeypatch.delenv("SLNCTL_CONFIG", raising=False)
    (tmp_path / "All.sln").write_text(new_solution_text(), encoding="utf-8")
    for rel in (
        "App/App.csproj",
        "libs/Core/Core.csproj",
        "libs/sub/Deep/Deep.csproj",
        "tools/Gen/Gen.fsproj",
    ):
        make_project(tmp_path, rel)
    return tmp_path


@pytest.fixture
def _in_repo(repo_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp repository so CLI defaults pick up All.sln.

    Use via ``@pytest.mark.usefixtures("_in_repo")`` on command test classes.
    """
    monkeypatch.chdir(repo_root)


@pytest.fixture
def settings(repo_root: Path) -> SlnSettings:
    """Default settings with config discovery rooted at the temp repository."""
    return SlnSettings.from_cli(start=repo_root)


@pytest.fixture
def document(tmp_path: Path) -> SolutionDocument:
    """An empty in-memory document based at ``tmp_path``."""
    return SolutionDocument(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_project(root: Path, relative: str) -> Path:
    """Create a minimal project file at ``root / relative``."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(CSPROJ, encoding="utf-8")
    return path


def reload(root: Path, name: str = "All.sln") -> SlnFile:
    """Load a solution fresh from disk."""
    return load_solution(root / name)
