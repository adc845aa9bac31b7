"""Command: remove projects from a solution."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slnctl.commands._base import SlnCommand

if TYPE_CHECKING:
    from slnctl.commands._context import AppContext


@click.command(
    cls=SlnCommand,
    examples="""\
  slnctl remove src/App/App.csproj
  slnctl remove libs/Core
  slnctl --json remove --solution build/All.sln tools/Gen/Gen.csproj""",
)
@click.argument("projects", nargs=-1)
@click.option(
    "-s",
    "--solution",
    default=".",
    show_default=True,
    help="Solution file, or the directory containing it.",
)
@click.pass_obj
def remove(app: AppContext, projects: tuple[str, ...], solution: str) -> None:
    """Remove projects from a solution, pruning folders left empty."""
    app.emit(app.membership.remove(solution, list(projects)))
