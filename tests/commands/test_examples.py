"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from slnctl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["add", "--examples"], ["slnctl add", "--in-root", "--solution-folder libs/core"]),
    (["remove", "--examples"], ["slnctl remove libs/Core"]),
    (["list", "--examples"], ["slnctl list"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples_flag(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_examples_not_in_help_body(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["add", "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output
    assert "slnctl add --in-root" not in result.output
