"""Argument-shape checks run before any solution or project I/O."""

from __future__ import annotations

import shlex
from collections.abc import Sequence

from slnctl.domain.errors import MisplacedSolutionArgumentError, NoProjectsError

SOLUTION_EXTENSION = ".sln"


def find_misplaced_solution_argument(
    arguments: Sequence[str],
    extension: str = SOLUTION_EXTENSION,
) -> str | None:
    """Return the first project argument that is really a solution file."""
    return next((arg for arg in arguments if arg.endswith(extension)), None)


def suggest_command_line(
    command: str,
    solution: str,
    arguments: Sequence[str],
    *,
    options: Sequence[str] = (),
    extension: str = SOLUTION_EXTENSION,
) -> str:
    """Rebuild the command line with the solution moved to ``--solution``.

    Examples:
        >>> suggest_command_line("add", "x.sln", ["x.sln", "a.csproj"])
        'slnctl add --solution x.sln a.csproj'
    """
    projects = [arg for arg in arguments if not arg.endswith(extension)]
    return shlex.join(["slnctl", command, "--solution", solution, *options, *projects])


def check_project_arguments(
    command: str,
    arguments: Sequence[str],
    *,
    options: Sequence[str] = (),
    extension: str = SOLUTION_EXTENSION,
) -> None:
    """Validate the project argument list of an add/remove command.

    Raises:
        NoProjectsError: If no project paths were given.
        MisplacedSolutionArgumentError: If a solution file appears among the
            project paths. Carries the corrected command line.
    """
    if not arguments:
        msg = f"Specify at least one project to {command}"
        raise NoProjectsError(msg)

    solution = find_misplaced_solution_argument(arguments, extension)
    if solution is not None:
        suggestion = suggest_command_line(
            command, solution, arguments, options=options, extension=extension
        )
        raise MisplacedSolutionArgumentError(solution, suggestion)
