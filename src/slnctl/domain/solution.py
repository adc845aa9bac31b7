"""SolutionDocument — arena-backed model of a solution's membership tree.

Projects and solution folders live in a single insertion-ordered arena keyed
by their entry id, a braced GUID. Ids compare case-insensitively but keep the
spelling read from the file. Parent links are ids, never object references;
the root is ``parent_id = None``. A secondary index maps ``(parent_id, folder
name)`` to a folder id so lookup by name within a parent is O(1).

INVARIANT: a project path appears at most once in the document.
INVARIANT: folder names are unique within a parent.
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from slnctl.domain.types import ProjectTypeGuid

PROJECT_DEPENDENCIES = "ProjectDependencies"


def new_entry_id() -> str:
    """Generate a fresh entry id in solution-file form: ``{XXXXXXXX-...}``."""
    return "{" + str(uuid.uuid4()).upper() + "}"


def id_key(entry_id: str) -> str:
    """Comparison key for an entry id; GUIDs are case-insensitive."""
    return entry_id.upper()


def normalize_relative_path(path: str) -> str:
    """Use ``/`` separators and drop leading ``./`` markers."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def relative_project_path(base_directory: Path | str, project_path: Path | str) -> str:
    """Express *project_path* relative to *base_directory*.

    Absolute paths are relativized (escaping the tree yields a ``..`` prefix);
    relative paths are taken as already relative to the base directory.
    """
    raw = str(project_path)
    if not os.path.isabs(raw):
        return normalize_relative_path(raw)
    relative = os.path.relpath(os.path.abspath(raw), os.path.abspath(base_directory))
    return normalize_relative_path(relative)


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


@dataclass
class ProjectSection:
    """A ``ProjectSection(name) = kind`` block nested in a solution entry."""

    name: str
    kind: str
    properties: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class ProjectEntry:
    """A project referenced by the solution."""

    id: str
    type_guid: str
    name: str
    path: str
    parent_id: str | None = None
    sections: list[ProjectSection] = field(default_factory=list)

    def remove_dependency(self, project_id: str) -> bool:
        """Drop a ``ProjectDependencies`` reference to *project_id*.

        A dependency section left without entries is removed altogether.
        """
        removed = False
        wanted = id_key(project_id)
        for section in self.sections:
            if section.name != PROJECT_DEPENDENCIES:
                continue
            kept = [(k, v) for k, v in section.properties if id_key(k) != wanted]
            removed = removed or len(kept) != len(section.properties)
            section.properties = kept
        self.sections = [
            s for s in self.sections if s.name != PROJECT_DEPENDENCIES or s.properties
        ]
        return removed


@dataclass
class FolderEntry:
    """A solution folder: a purely organizational grouping node."""

    id: str
    name: str
    parent_id: str | None = None
    sections: list[ProjectSection] = field(default_factory=list)
    type_guid: str = str(ProjectTypeGuid.SOLUTION_FOLDER)

    @property
    def path(self) -> str:
        """Solution folders are written with their name in the path slot."""
        return self.name

    @property
    def has_items(self) -> bool:
        """Whether the folder carries its own sections (e.g. solution items)."""
        return bool(self.sections)


Entry = ProjectEntry | FolderEntry


@dataclass
class ConfigurationEntry:
    """One ``{ID}.Cfg|Platform.ActiveCfg = Cfg|Platform`` mapping."""

    project_id: str
    key: str
    value: str


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class SolutionDocument:
    """In-memory solution owned by a single command invocation.

    Args:
        base_directory: Directory containing the solution file. All project
            paths are stored relative to it.
        case_sensitive: Exact ordinal matching of paths and folder names
            when True; case-insensitive when False.
    """

    def __init__(self, base_directory: Path | str, *, case_sensitive: bool = True) -> None:
        self.base_directory = Path(base_directory)
        self.case_sensitive = case_sensitive
        self.solution_configurations: list[str] = []
        self.project_configurations: list[ConfigurationEntry] = []
        self._entries: dict[str, Entry] = {}
        self._folder_index: dict[tuple[str | None, str], str] = {}

    # --- Views ---

    @property
    def entries(self) -> list[Entry]:
        """All entries in creation order."""
        return list(self._entries.values())

    @property
    def projects(self) -> list[ProjectEntry]:
        return [e for e in self._entries.values() if isinstance(e, ProjectEntry)]

    @property
    def folders(self) -> list[FolderEntry]:
        return [e for e in self._entries.values() if isinstance(e, FolderEntry)]

    def get(self, entry_id: str) -> Entry | None:
        return self._entries.get(id_key(entry_id))

    def children(self, parent_id: str | None) -> list[Entry]:
        """Direct children of a folder (or of the root when None)."""
        wanted = self._parent_key(parent_id)
        return [e for e in self._entries.values() if self._parent_key(e.parent_id) == wanted]

    def folder_chain(self, entry: Entry) -> list[str]:
        """Names of the folders enclosing *entry*, outermost first."""
        names: list[str] = []
        seen: set[str] = set()
        parent_id = entry.parent_id
        while parent_id is not None and id_key(parent_id) not in seen:
            seen.add(id_key(parent_id))
            parent = self.get(parent_id)
            if parent is None:
                break
            names.append(parent.name)
            parent_id = parent.parent_id
        return names[::-1]

    def configurations_for(self, project_id: str) -> list[ConfigurationEntry]:
        wanted = id_key(project_id)
        return [c for c in self.project_configurations if id_key(c.project_id) == wanted]

    # --- Lookup ---

    def _key(self, value: str) -> str:
        return value if self.case_sensitive else value.casefold()

    @staticmethod
    def _parent_key(parent_id: str | None) -> str | None:
        return None if parent_id is None else id_key(parent_id)

    def _index_key(self, parent_id: str | None, name: str) -> tuple[str | None, str]:
        return self._parent_key(parent_id), self._key(name)

    def relative_path(self, project_path: Path | str) -> str:
        """Path of a project relative to the base directory, ``/``-separated."""
        return relative_project_path(self.base_directory, project_path)

    def find_project(self, relative_path: str) -> ProjectEntry | None:
        wanted = self._key(normalize_relative_path(relative_path))
        for project in self.projects:
            if self._key(project.path) == wanted:
                return project
        return None

    def find_folder(self, name: str, parent_id: str | None = None) -> FolderEntry | None:
        folder_id = self._folder_index.get(self._index_key(parent_id, name))
        if folder_id is None:
            return None
        folder = self.get(folder_id)
        return folder if isinstance(folder, FolderEntry) else None

    # --- Mutation primitives ---

    def add_entry(self, entry: Entry) -> Entry:
        """Register an entry in the arena.

        Raises:
            ValueError: If an entry with the same id already exists.
        """
        key = id_key(entry.id)
        if key in self._entries:
            msg = f"Duplicate solution entry id: {entry.id}"
            raise ValueError(msg)
        self._entries[key] = entry
        if isinstance(entry, FolderEntry):
            self._folder_index.setdefault(self._index_key(entry.parent_id, entry.name), entry.id)
        return entry

    def set_parent(self, entry_id: str, parent_id: str | None) -> None:
        """Move an entry under *parent_id* (None for the root)."""
        entry = self._entries[id_key(entry_id)]
        if isinstance(entry, FolderEntry):
            self._unindex(entry)
            entry.parent_id = parent_id
            self._folder_index.setdefault(self._index_key(parent_id, entry.name), entry.id)
        else:
            entry.parent_id = parent_id

    def remove_entry(self, entry_id: str) -> Entry:
        """Detach and delete an entry. Children are not touched."""
        entry = self._entries.pop(id_key(entry_id))
        if isinstance(entry, FolderEntry):
            self._unindex(entry)
        return entry

    def _unindex(self, folder: FolderEntry) -> None:
        """Drop *folder* from the name index.

        Another folder still holding the same name under the same parent
        takes over the slot, so it stays reachable by name.
        """
        key = self._index_key(folder.parent_id, folder.name)
        if self._folder_index.get(key) != folder.id:
            return
        del self._folder_index[key]
        for other in self.folders:
            if other is not folder and self._index_key(other.parent_id, other.name) == key:
                self._folder_index[key] = other.id
                break
