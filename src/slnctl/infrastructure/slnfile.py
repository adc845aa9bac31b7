"""Solution file (.sln) loading and writing.

The loader models only what membership operations need: project and folder
entries (with their nested ``ProjectSection`` blocks), the solution and
project configuration maps, and folder nesting. Every other line (header,
``SolutionProperties``, extensibility globals, unknown sections) is kept
verbatim and written back in place.

Paths are stored with ``/`` separators in memory and written with ``\\``.
The original BOM and line endings are preserved.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from slnctl.domain.errors import (
    InvalidSolutionError,
    MultipleSolutionsError,
    SolutionNotFoundError,
)
from slnctl.domain.solution import (
    ConfigurationEntry,
    FolderEntry,
    ProjectEntry,
    ProjectSection,
    SolutionDocument,
    normalize_relative_path,
)
from slnctl.domain.types import is_solution_folder

logger = logging.getLogger(__name__)

SOLUTION_EXTENSION = ".sln"
SOLUTION_HEADER = "Microsoft Visual Studio Solution File"

SOLUTION_CONFIGURATIONS = "SolutionConfigurationPlatforms"
PROJECT_CONFIGURATIONS = "ProjectConfigurationPlatforms"
NESTED_PROJECTS = "NestedProjects"

_MANAGED_KINDS: dict[str, str] = {
    SOLUTION_CONFIGURATIONS: "preSolution",
    PROJECT_CONFIGURATIONS: "postSolution",
    NESTED_PROJECTS: "preSolution",
}

_BOM = b"\xef\xbb\xbf"

_PROJECT_RE = re.compile(
    r'^Project\("(?P<type>[^"]*)"\)\s*=\s*"(?P<name>[^"]*)"\s*,\s*"(?P<path>[^"]*)"'
    r'\s*,\s*"(?P<id>[^"]*)"$'
)
_SECTION_RE = re.compile(r"^(?P<tag>ProjectSection|GlobalSection)\((?P<name>[^)]*)\)\s*=\s*(?P<kind>\S+)$")


def new_solution_text() -> str:
    """Contents of an empty solution, as written by ``dotnet new sln``."""
    return (
        "\n"
        "Microsoft Visual Studio Solution File, Format Version 12.00\n"
        "# Visual Studio Version 17\n"
        "VisualStudioVersion = 17.0.31903.59\n"
        "MinimumVisualStudioVersion = 10.0.40219.1\n"
        "Global\n"
        "\tGlobalSection(SolutionProperties) = preSolution\n"
        "\t\tHideSolutionNode = FALSE\n"
        "\tEndGlobalSection\n"
        "EndGlobal\n"
    )


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_solution_file(path: Path | str, extension: str = SOLUTION_EXTENSION) -> Path:
    """Resolve a solution file from a file path or a containing directory.

    Raises:
        SolutionNotFoundError: If *path* does not exist or the directory
            holds no solution file.
        MultipleSolutionsError: If the directory holds more than one.
    """
    target = Path(path).absolute()
    if target.is_file():
        return target
    if not target.is_dir():
        msg = f"Specified solution file {target} does not exist"
        raise SolutionNotFoundError(msg, path=str(target))

    candidates = sorted(c for c in target.iterdir() if c.is_file() and c.name.endswith(extension))
    if not candidates:
        msg = f"No solution file found in {target}"
        raise SolutionNotFoundError(msg, path=str(target))
    if len(candidates) > 1:
        msg = f"Found more than one solution file in {target}. Specify which one to use."
        raise MultipleSolutionsError(msg, path=str(target), candidates=[c.name for c in candidates])
    return candidates[0]


# ---------------------------------------------------------------------------
# Model of the on-disk layout
# ---------------------------------------------------------------------------


@dataclass
class GlobalSection:
    """A ``GlobalSection(name) = kind`` block.

    Managed sections (configurations, nesting) are placeholders: their
    properties are regenerated from the document on write.
    """

    name: str
    kind: str
    properties: list[tuple[str, str]] = field(default_factory=list)

    @property
    def managed(self) -> bool:
        return self.name in _MANAGED_KINDS


@dataclass
class SlnFile:
    """A loaded solution file: the document plus everything needed to write it back."""

    path: Path
    document: SolutionDocument
    header: list[str] = field(default_factory=list)
    loose_lines: list[str] = field(default_factory=list)
    global_sections: list[GlobalSection] = field(default_factory=list)
    trailer: list[str] = field(default_factory=list)
    bom: bool = True
    newline: str = "\r\n"

    def render(self) -> str:
        """Serialize to solution-file text."""
        lines = list(self.header)
        for entry in self.document.entries:
            lines.extend(_render_entry(entry))
        lines.extend(self.loose_lines)
        lines.append("Global")
        for section in self._sections_to_write():
            lines.append(f"\tGlobalSection({section.name}) = {section.kind}")
            lines.extend(f"\t\t{key} = {value}" for key, value in section.properties)
            lines.append("\tEndGlobalSection")
        lines.append("EndGlobal")
        lines.extend(self.trailer)
        return self.newline.join(lines) + self.newline

    def write(self) -> None:
        """Write the solution back to :attr:`path`."""
        encoding = "utf-8-sig" if self.bom else "utf-8"
        with self.path.open("w", encoding=encoding, newline="") as fh:
            fh.write(self.render())
        logger.debug("Wrote solution %s", self.path)

    def _sections_to_write(self) -> list[GlobalSection]:
        managed = {
            SOLUTION_CONFIGURATIONS: [(c, c) for c in self.document.solution_configurations],
            PROJECT_CONFIGURATIONS: [
                (f"{c.project_id}.{c.key}", c.value) for c in self.document.project_configurations
            ],
            NESTED_PROJECTS: [
                (e.id, e.parent_id) for e in self.document.entries if e.parent_id is not None
            ],
        }

        sections: list[GlobalSection] = []
        for section in self.global_sections:
            if not section.managed:
                sections.append(section)
            elif managed[section.name]:
                sections.append(GlobalSection(section.name, section.kind, managed[section.name]))

        present = {s.name for s in sections}
        for name in (SOLUTION_CONFIGURATIONS, PROJECT_CONFIGURATIONS, NESTED_PROJECTS):
            if name in present or not managed[name]:
                continue
            created = GlobalSection(name, _MANAGED_KINDS[name], managed[name])
            if name == SOLUTION_CONFIGURATIONS:
                sections.insert(0, created)
            elif name == PROJECT_CONFIGURATIONS:
                names = [s.name for s in sections]
                at = names.index(SOLUTION_CONFIGURATIONS) + 1 if SOLUTION_CONFIGURATIONS in names else 0
                sections.insert(at, created)
            else:
                sections.append(created)
            present.add(name)
        return sections


def _render_entry(entry: ProjectEntry | FolderEntry) -> list[str]:
    path = entry.path.replace("/", "\\")
    lines = [f'Project("{entry.type_guid}") = "{entry.name}", "{path}", "{entry.id}"']
    for section in entry.sections:
        lines.append(f"\tProjectSection({section.name}) = {section.kind}")
        lines.extend(f"\t\t{key} = {value}" for key, value in section.properties)
        lines.append("\tEndProjectSection")
    lines.append("EndProject")
    return lines


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _split_property(line: str) -> tuple[str, str]:
    key, sep, value = line.partition("=")
    if not sep:
        return line.strip(), ""
    return key.strip(), value.strip()


class _SolutionParser:
    """Line-oriented parser producing an :class:`SlnFile`."""

    def __init__(self, path: Path, text: str, document: SolutionDocument) -> None:
        self.path = path
        self.document = document
        self.lines = text.splitlines()
        self.lineno = 0
        self.nesting: list[tuple[str, str]] = []

    def _next(self) -> Iterator[tuple[int, str]]:
        while self.lineno < len(self.lines):
            self.lineno += 1
            yield self.lineno, self.lines[self.lineno - 1]

    def _error(self, message: str) -> InvalidSolutionError:
        return InvalidSolutionError(
            f"Invalid solution file {self.path} (line {self.lineno}): {message}",
            path=str(self.path),
            line=self.lineno,
        )

    def parse(self) -> tuple[list[str], list[str], list[GlobalSection], list[str]]:
        header: list[str] = []
        loose: list[str] = []
        sections: list[GlobalSection] = []
        trailer: list[str] = []
        seen_entry = False
        seen_global = False

        for _, raw in self._next():
            line = raw.strip()
            if seen_global:
                trailer.append(raw)
            elif line.startswith("Project("):
                self._parse_entry(line)
                seen_entry = True
            elif line == "Global":
                sections = self._parse_global()
                seen_global = True
            elif seen_entry:
                if line:
                    loose.append(raw)
            else:
                header.append(raw)

        if not any(SOLUTION_HEADER in line for line in header):
            raise self._error("missing solution file header")
        self._apply_nesting()
        return header, loose, sections, trailer

    def _parse_entry(self, line: str) -> None:
        match = _PROJECT_RE.match(line)
        if match is None:
            raise self._error(f"malformed project line: {line}")

        type_guid = match["type"]
        entry_id = match["id"]
        entry_sections: list[ProjectSection] = []

        for _, raw in self._next():
            inner = raw.strip()
            if inner == "EndProject":
                break
            section = _SECTION_RE.match(inner)
            if section is None or section["tag"] != "ProjectSection":
                if inner:
                    raise self._error(f"unexpected line in project block: {inner}")
                continue
            entry_sections.append(
                ProjectSection(
                    section["name"],
                    section["kind"],
                    self._parse_properties("EndProjectSection"),
                )
            )
        else:
            raise self._error(f"unterminated project block for {match['name']!r}")

        entry: ProjectEntry | FolderEntry
        if is_solution_folder(type_guid):
            entry = FolderEntry(
                id=entry_id, name=match["name"], sections=entry_sections, type_guid=type_guid
            )
        else:
            entry = ProjectEntry(
                id=entry_id,
                type_guid=type_guid,
                name=match["name"],
                path=normalize_relative_path(match["path"]),
                sections=entry_sections,
            )
        try:
            self.document.add_entry(entry)
        except ValueError as exc:
            raise self._error(str(exc)) from exc

    def _parse_properties(self, terminator: str) -> list[tuple[str, str]]:
        properties: list[tuple[str, str]] = []
        for _, raw in self._next():
            inner = raw.strip()
            if inner == terminator:
                return properties
            if inner:
                properties.append(_split_property(inner))
        raise self._error(f"missing {terminator}")

    def _parse_global(self) -> list[GlobalSection]:
        sections: list[GlobalSection] = []
        for _, raw in self._next():
            inner = raw.strip()
            if inner == "EndGlobal":
                return sections
            if not inner:
                continue
            match = _SECTION_RE.match(inner)
            if match is None or match["tag"] != "GlobalSection":
                raise self._error(f"unexpected line in Global block: {inner}")
            properties = self._parse_properties("EndGlobalSection")
            section = GlobalSection(match["name"], match["kind"], properties)
            self._absorb(section)
            sections.append(section)
        raise self._error("missing EndGlobal")

    def _absorb(self, section: GlobalSection) -> None:
        """Move a managed section's content into the document."""
        if section.name == SOLUTION_CONFIGURATIONS:
            self.document.solution_configurations.extend(k for k, _ in section.properties)
        elif section.name == PROJECT_CONFIGURATIONS:
            for key, value in section.properties:
                project_id, dot, rest = key.partition("}.")
                if not dot:
                    raise self._error(f"malformed configuration entry: {key}")
                self.document.project_configurations.append(
                    ConfigurationEntry(project_id=f"{project_id}}}", key=rest, value=value)
                )
        elif section.name == NESTED_PROJECTS:
            self.nesting.extend(section.properties)
        else:
            return
        section.properties = []

    def _apply_nesting(self) -> None:
        for child_id, parent_id in self.nesting:
            child = self.document.get(child_id)
            parent = self.document.get(parent_id)
            if child is None or not isinstance(parent, FolderEntry):
                logger.warning("Ignoring dangling nesting %s -> %s in %s", child_id, parent_id, self.path)
                continue
            self.document.set_parent(child.id, parent.id)


def load_solution(
    path: Path | str,
    *,
    extension: str = SOLUTION_EXTENSION,
    case_sensitive: bool = True,
) -> SlnFile:
    """Load a solution from a file or from the directory containing it.

    Raises:
        SolutionNotFoundError: No solution file at or in *path*.
        MultipleSolutionsError: *path* is a directory with several solutions.
        InvalidSolutionError: The file cannot be parsed.
    """
    sln_path = find_solution_file(path, extension)
    raw = sln_path.read_bytes()
    bom = raw.startswith(_BOM)
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        msg = f"Invalid solution file {sln_path}: {exc}"
        raise InvalidSolutionError(msg, path=str(sln_path)) from exc

    document = SolutionDocument(sln_path.parent, case_sensitive=case_sensitive)
    parser = _SolutionParser(sln_path, text, document)
    header, loose, sections, trailer = parser.parse()
    logger.debug(
        "Loaded solution %s (%d projects, %d folders)",
        sln_path,
        len(document.projects),
        len(document.folders),
    )
    return SlnFile(
        path=sln_path,
        document=document,
        header=header,
        loose_lines=loose,
        global_sections=sections,
        trailer=trailer,
        bom=bom,
        newline="\r\n" if "\r\n" in text else "\n",
    )
