"""Command: list the projects of a solution."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slnctl.commands._base import SlnCommand

if TYPE_CHECKING:
    from slnctl.commands._context import AppContext


@click.command(
    "list",
    cls=SlnCommand,
    examples="""\
  slnctl list
  slnctl -q list --solution build/All.sln""",
)
@click.option(
    "-s",
    "--solution",
    default=".",
    show_default=True,
    help="Solution file, or the directory containing it.",
)
@click.pass_obj
def list_cmd(app: AppContext, solution: str) -> None:
    """List the projects in a solution with their solution folders."""
    app.emit(app.membership.list_projects(solution))
