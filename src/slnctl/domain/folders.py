"""Folder-path derivation: which solution folders a project lands in.

By default the folder chain mirrors the project's location on disk, minus the
project's own directory, which by convention is named after the project:

- ``foo.csproj``              -> ``[]`` (root)
- ``foo/foo.csproj``          -> ``[]`` (root)
- ``libs/foo/foo.csproj``     -> ``["libs"]``
- ``libs/sub/foo/foo.csproj`` -> ``["libs", "sub"]``
- ``../shared/x.csproj``      -> ``[]`` (outside the solution tree)

Callers may force root placement or supply an explicit chain instead.
"""

from __future__ import annotations

import posixpath
import re
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel

from slnctl.domain.errors import MutuallyExclusiveOptionsError
from slnctl.domain.solution import relative_project_path

_SEPARATORS = re.compile(r"[\\/]")


class PlacementMode(StrEnum):
    """How the folder chain for an added project is chosen."""

    AUTO = "auto"
    ROOT = "root"
    EXPLICIT = "explicit"


class FolderPlacement(BaseModel):
    """Folder placement requested by the caller for a batch of projects."""

    model_config = {"frozen": True}

    mode: PlacementMode = PlacementMode.AUTO
    folders: tuple[str, ...] = ()

    @classmethod
    def from_options(
        cls,
        *,
        in_root: bool = False,
        solution_folder: str | None = None,
    ) -> FolderPlacement:
        """Build a placement from the two mutually exclusive caller options.

        Raises:
            MutuallyExclusiveOptionsError: If both options are set.
        """
        if in_root and solution_folder:
            msg = "Root placement and an explicit solution folder cannot be combined"
            raise MutuallyExclusiveOptionsError(msg, solution_folder=solution_folder)
        if in_root:
            return cls(mode=PlacementMode.ROOT)
        if solution_folder:
            return cls(mode=PlacementMode.EXPLICIT, folders=split_folder_path(solution_folder))
        return cls()


def split_folder_path(folder_path: str) -> tuple[str, ...]:
    """Split ``a/b\\c`` into ``("a", "b", "c")``, dropping empty segments."""
    return tuple(part for part in _SEPARATORS.split(folder_path) if part)


def folders_from_relative_path(relative_path: str) -> list[str]:
    """Derive the folder chain from a path relative to the solution directory."""
    path = relative_path.replace("\\", "/")

    # Out-of-tree projects are never nested.
    if path.startswith(".."):
        return []

    if path.startswith("./"):
        path = path[2:]

    project_directory = posixpath.dirname(path)
    if not project_directory:
        return []

    # The project's own directory is not turned into a folder level.
    folders_path = posixpath.dirname(project_directory)
    if not folders_path:
        return []

    return folders_path.split("/")


def derive_folder_chain(
    base_directory: Path | str,
    project_path: Path | str,
    placement: FolderPlacement | None = None,
) -> list[str] | None:
    """Compute the solution-folder chain for a project, outermost first.

    Returns None for forced root placement, the explicit chain verbatim when
    one was given, and otherwise the chain derived from the on-disk layout.
    *project_path* may be absolute or already relative to *base_directory*.
    """
    placement = placement or FolderPlacement()
    if placement.mode is PlacementMode.ROOT:
        return None
    if placement.mode is PlacementMode.EXPLICIT:
        return list(placement.folders)
    return folders_from_relative_path(relative_project_path(base_directory, project_path))
