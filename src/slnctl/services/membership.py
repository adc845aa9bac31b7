"""MembershipService — add, remove, and list solution projects.

Each operation runs the same pipeline:

VALIDATE → LOAD → RESOLVE → MUTATE → PERSIST

Argument-shape checks run before any I/O. The solution is written only
after every mutation in the batch succeeded, and only if something changed,
so a resolution error leaves the file on disk untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from slnctl.domain.arguments import check_project_arguments
from slnctl.domain.errors import SlnError
from slnctl.domain.folders import FolderPlacement, derive_folder_chain
from slnctl.domain.membership import (
    add_project,
    remove_empty_configuration_sections,
    remove_empty_solution_folders,
    remove_project,
)
from slnctl.infrastructure.filesystem import resolve_project_paths, resolve_removal_paths
from slnctl.services.base import BaseService
from slnctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def _placement_options(in_root: bool, solution_folder: str | None) -> list[str]:
    """Re-create the placement flags for a suggested command line."""
    if in_root:
        return ["--in-root"]
    if solution_folder:
        return ["--solution-folder", solution_folder]
    return []


def _write_failed(op: str, exc: OSError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="WRITE_FAILED",
            message=f"Could not write solution: {exc}",
            detail={"path": str(exc.filename) if exc.filename else ""},
        ),
    )


class MembershipService(BaseService):
    """Adds projects to and removes projects from a solution."""

    def add(
        self,
        solution: str,
        projects: Sequence[str],
        *,
        in_root: bool = False,
        solution_folder: str | None = None,
    ) -> ServiceResult:
        """Add *projects* to *solution*, deriving folders unless overridden."""
        op = "add_projects"
        try:
            placement = FolderPlacement.from_options(
                in_root=in_root, solution_folder=solution_folder
            )
            check_project_arguments(
                "add",
                projects,
                options=_placement_options(in_root, solution_folder),
                extension=self._settings.solution.extension,
            )
            sln = self._load(solution)
            paths = resolve_project_paths(
                projects,
                cwd=self._cwd,
                extensions=self._settings.solution.project_extensions,
            )
        except SlnError as exc:
            logger.debug("add failed: %s", exc.code)
            return ServiceResult.failure(op, exc)

        document = sln.document
        membership = self._settings.membership
        added: list[dict[str, Any]] = []
        skipped: list[str] = []

        for path in paths:
            relative = document.relative_path(path)
            chain = derive_folder_chain(document.base_directory, path, placement)
            created = add_project(
                document,
                path,
                chain,
                configurations=membership.default_configurations,
                platforms=membership.default_platforms,
            )
            if created:
                logger.debug("Added %s under %s", relative, chain or "<root>")
                added.append({"path": relative, "folders": list(chain or [])})
            else:
                logger.debug("Solution already contains %s", relative)
                skipped.append(relative)

        changed = bool(added)
        try:
            self._persist(sln, changed)
        except OSError as exc:
            return _write_failed(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "solution": str(sln.path),
                "added": added,
                "skipped": skipped,
                "changed": changed,
            },
        )

    def remove(self, solution: str, projects: Sequence[str]) -> ServiceResult:
        """Remove *projects* from *solution* and prune what they leave behind."""
        op = "remove_projects"
        try:
            check_project_arguments(
                "remove", projects, extension=self._settings.solution.extension
            )
            sln = self._load(solution)
            paths = resolve_removal_paths(
                projects,
                cwd=self._cwd,
                extensions=self._settings.solution.project_extensions,
            )
        except SlnError as exc:
            logger.debug("remove failed: %s", exc.code)
            return ServiceResult.failure(op, exc)

        document = sln.document
        removed: list[str] = []
        not_found: list[str] = []

        for path in paths:
            relative = document.relative_path(path)
            if remove_project(document, relative):
                logger.debug("Removed %s", relative)
                removed.append(relative)
            else:
                logger.debug("Solution does not contain %s", relative)
                not_found.append(relative)

        configurations_removed = remove_empty_configuration_sections(document)
        folders_removed = remove_empty_solution_folders(document)

        changed = bool(removed)
        try:
            self._persist(sln, changed)
        except OSError as exc:
            return _write_failed(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "solution": str(sln.path),
                "removed": removed,
                "not_found": not_found,
                "folders_removed": folders_removed,
                "configurations_removed": configurations_removed,
                "changed": changed,
            },
        )

    def list_projects(self, solution: str) -> ServiceResult:
        """List the projects of *solution* with their folder chains."""
        op = "list_projects"
        try:
            sln = self._load(solution)
        except SlnError as exc:
            return ServiceResult.failure(op, exc)

        document = sln.document
        items = [
            {
                "name": project.name,
                "path": project.path,
                "folders": document.folder_chain(project),
            }
            for project in document.projects
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"solution": str(sln.path), "items": items, "count": len(items)},
        )
