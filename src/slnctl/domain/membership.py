"""Solution mutator — idempotent project add/remove with consistency cleanup.

Add walks (and creates) the folder chain, then attaches the project under its
innermost folder. Remove detaches a project; the batch-level cleanup passes
then prune orphaned configuration entries and folders left without projects.

INVARIANT: adding a path that is already present never changes the document.
INVARIANT: after cleanup every configuration entry references a live project.
INVARIANT: after cleanup no folder subtree is free of projects, unless the
folder carries its own solution items.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from slnctl.domain.solution import (
    ConfigurationEntry,
    FolderEntry,
    ProjectEntry,
    SolutionDocument,
    id_key,
    new_entry_id,
)
from slnctl.domain.types import is_solution_folder, project_type_for

DEFAULT_CONFIGURATIONS = ("Debug", "Release")
DEFAULT_PLATFORMS = ("Any CPU", "x64", "x86")
PROJECT_PLATFORM = "Any CPU"


# ---------------------------------------------------------------------------
# Add
# ---------------------------------------------------------------------------


def ensure_folder_chain(document: SolutionDocument, folder_chain: Sequence[str]) -> str | None:
    """Find or create each folder of *folder_chain* from the root down.

    Returns the innermost folder id, or None when the chain is empty.
    """
    parent_id: str | None = None
    for name in folder_chain:
        folder = document.find_folder(name, parent_id)
        if folder is None:
            folder = FolderEntry(id=new_entry_id(), name=name, parent_id=parent_id)
            document.add_entry(folder)
        parent_id = folder.id
    return parent_id


def add_default_build_configurations(
    document: SolutionDocument,
    configurations: Sequence[str] = DEFAULT_CONFIGURATIONS,
    platforms: Sequence[str] = DEFAULT_PLATFORMS,
) -> None:
    """Seed ``Cfg|Platform`` solution configurations if there are none."""
    if document.solution_configurations:
        return
    document.solution_configurations.extend(
        f"{configuration}|{platform}" for configuration in configurations for platform in platforms
    )


def map_solution_configurations(document: SolutionDocument, project: ProjectEntry) -> None:
    """Map every solution configuration onto *project*.

    Project files are not inspected, so every solution platform builds the
    project's ``Any CPU`` platform of the same configuration name.
    """
    for solution_config in document.solution_configurations:
        configuration = solution_config.split("|", 1)[0]
        project_config = f"{configuration}|{PROJECT_PLATFORM}"
        for suffix in ("ActiveCfg", "Build.0"):
            document.project_configurations.append(
                ConfigurationEntry(
                    project_id=project.id,
                    key=f"{solution_config}.{suffix}",
                    value=project_config,
                )
            )


def add_project(
    document: SolutionDocument,
    project_path: Path | str,
    folder_chain: Sequence[str] | None,
    *,
    configurations: Sequence[str] = DEFAULT_CONFIGURATIONS,
    platforms: Sequence[str] = DEFAULT_PLATFORMS,
) -> bool:
    """Add a project under *folder_chain* (root when empty or None).

    Returns True if a new project entry was created, False if the solution
    already contained the path. Existing entries are never moved.
    """
    relative_path = document.relative_path(project_path)
    if document.find_project(relative_path) is not None:
        return False

    project = ProjectEntry(
        id=new_entry_id(),
        type_guid=project_type_for(relative_path),
        name=Path(relative_path).stem,
        path=relative_path,
    )
    if not is_solution_folder(project.type_guid):
        add_default_build_configurations(document, configurations, platforms)
        map_solution_configurations(document, project)

    project.parent_id = ensure_folder_chain(document, folder_chain or ())
    document.add_entry(project)
    return True


# ---------------------------------------------------------------------------
# Remove
# ---------------------------------------------------------------------------


def remove_project(document: SolutionDocument, relative_path: str) -> bool:
    """Remove the project at *relative_path*.

    Returns False when the solution does not contain it. Dependencies other
    projects declare on it are dropped along with the entry.
    """
    project = document.find_project(relative_path)
    if project is None:
        return False
    document.remove_entry(project.id)
    for other in document.projects:
        other.remove_dependency(project.id)
    return True


def remove_empty_configuration_sections(document: SolutionDocument) -> int:
    """Drop configuration entries of projects that no longer exist.

    When no project remains, the solution configurations go too. Returns the
    number of project configuration entries removed.
    """
    live = {id_key(project.id) for project in document.projects}
    kept = [c for c in document.project_configurations if id_key(c.project_id) in live]
    removed = len(document.project_configurations) - len(kept)
    document.project_configurations = kept
    if not live:
        document.solution_configurations.clear()
    return removed


def remove_empty_solution_folders(document: SolutionDocument) -> int:
    """Remove every folder whose subtree holds no project.

    Cascades upward and also applies to folders that were empty before the
    current operation. Returns the number of folders removed.
    """
    in_use: set[str] = set()
    for entry in document.entries:
        if isinstance(entry, FolderEntry):
            if not entry.has_items:
                continue
            in_use.add(id_key(entry.id))
        parent_id = entry.parent_id
        while parent_id is not None and id_key(parent_id) not in in_use:
            in_use.add(id_key(parent_id))
            parent = document.get(parent_id)
            parent_id = parent.parent_id if parent is not None else None

    empty = [folder.id for folder in document.folders if id_key(folder.id) not in in_use]
    for folder_id in empty:
        document.remove_entry(folder_id)
    return len(empty)
