"""Filesystem lookups for project arguments.

Turns user-supplied project arguments into absolute project-file paths:
files are taken as-is, directories are replaced by the single project file
they contain. Adding requires every argument to exist; removing does not.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from slnctl.domain.errors import (
    MultipleProjectFilesError,
    PathNotFoundError,
    ProjectFileNotFoundError,
)

PROJECT_EXTENSIONS: tuple[str, ...] = (
    ".csproj",
    ".fsproj",
    ".vbproj",
    ".sqlproj",
    ".vcxproj",
    ".proj",
    ".esproj",
    ".njsproj",
    ".pyproj",
)


def _absolute(path: str, cwd: Path | None) -> Path:
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = (cwd or Path.cwd()) / candidate
    return Path(os.path.normpath(candidate))


def ensure_paths_exist(paths: Iterable[str], *, cwd: Path | None = None) -> None:
    """Raise for the first path that does not exist.

    Raises:
        PathNotFoundError: Naming the first missing path.
    """
    for path in paths:
        if not _absolute(path, cwd).exists():
            msg = f"Could not find project or directory `{path}`"
            raise PathNotFoundError(msg, path=path)


def find_project_file_in_directory(
    directory: Path,
    extensions: Sequence[str] = PROJECT_EXTENSIONS,
) -> Path:
    """Return the only project file directly inside *directory*.

    Raises:
        ProjectFileNotFoundError: If the directory holds no project file.
        MultipleProjectFilesError: If it holds more than one.
    """
    wanted = {ext.lower() for ext in extensions}
    candidates = sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in wanted
    )
    if not candidates:
        msg = f"Could not find any project in `{directory}`"
        raise ProjectFileNotFoundError(msg, path=str(directory))
    if len(candidates) > 1:
        msg = f"Found more than one project in `{directory}`. Specify which one to use."
        raise MultipleProjectFilesError(
            msg, path=str(directory), candidates=[p.name for p in candidates]
        )
    return candidates[0]


def resolve_project_paths(
    arguments: Sequence[str],
    *,
    cwd: Path | None = None,
    extensions: Sequence[str] = PROJECT_EXTENSIONS,
) -> list[Path]:
    """Map project arguments to absolute project-file paths.

    Every argument must exist; see :func:`ensure_paths_exist`.
    """
    ensure_paths_exist(arguments, cwd=cwd)
    resolved: list[Path] = []
    for argument in arguments:
        path = _absolute(argument, cwd)
        if path.is_dir():
            path = find_project_file_in_directory(path, extensions)
        resolved.append(path)
    return resolved


def resolve_removal_paths(
    arguments: Sequence[str],
    *,
    cwd: Path | None = None,
    extensions: Sequence[str] = PROJECT_EXTENSIONS,
) -> list[Path]:
    """Map remove arguments to absolute paths without requiring them to exist.

    A project already deleted from disk can still be removed from the
    solution, so missing arguments are kept as their absolute path. Only an
    existing directory is replaced by the project file it contains.
    """
    resolved: list[Path] = []
    for argument in arguments:
        path = _absolute(argument, cwd)
        if path.is_dir():
            path = find_project_file_in_directory(path, extensions)
        resolved.append(path)
    return resolved
