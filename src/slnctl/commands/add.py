"""Command: add projects to a solution."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slnctl.commands._base import SlnCommand

if TYPE_CHECKING:
    from slnctl.commands._context import AppContext


@click.command(
    cls=SlnCommand,
    examples="""\
  slnctl add src/App/App.csproj
  slnctl add libs/Core libs/Data
  slnctl add --solution build/All.sln tools/Gen/Gen.csproj
  slnctl add --in-root samples/Demo/Demo.csproj
  slnctl add --solution-folder libs/core libs/Core/Core.csproj""",
)
@click.argument("projects", nargs=-1)
@click.option(
    "-s",
    "--solution",
    default=".",
    show_default=True,
    help="Solution file, or the directory containing it.",
)
@click.option("--in-root", is_flag=True, help="Place projects at the root, not in folders.")
@click.option(
    "--solution-folder",
    default=None,
    help="Destination solution folder path (e.g. libs/core).",
)
@click.pass_obj
def add(
    app: AppContext,
    projects: tuple[str, ...],
    solution: str,
    in_root: bool,
    solution_folder: str | None,
) -> None:
    """Add one or more projects (or directories holding one) to a solution.

    By default each project is placed in solution folders mirroring its
    location on disk, minus the project's own directory.
    """
    result = app.membership.add(
        solution,
        list(projects),
        in_root=in_root,
        solution_folder=solution_folder,
    )
    app.emit(result)
