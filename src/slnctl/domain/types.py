"""Project type GUIDs and extension-based project classification.

A solution entry's type GUID tells tooling how to load the project. Solution
folders share one well-known GUID; real projects are classified by their
project-file extension.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import PurePath


class ProjectTypeGuid(StrEnum):
    """Well-known project type GUIDs written in ``Project("{...}")`` lines."""

    SOLUTION_FOLDER = "{2150E333-8FDC-42A3-9474-1A3956D46DE8}"
    CSHARP = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"
    CSHARP_SDK = "{9A19103F-16F7-4668-BE54-9A1E7A4F7556}"
    FSHARP = "{F2A71F9B-5D33-465A-A702-920D77279786}"
    VISUAL_BASIC = "{F184B08F-C81C-45F6-A57F-5ABD9991F28F}"
    CPP = "{8BC9CEB8-8B4A-11D0-8D11-00A0C91BC942}"
    SQL = "{00D1A9C2-B5F0-4AF3-8072-F6C62B433612}"
    JAVASCRIPT = "{54A90642-561A-4BB1-A94E-469ADEE60C69}"
    NODE = "{9092AA53-FB69-4BD0-B25A-DF8DDD9B1A2F}"
    PYTHON = "{888888A0-9F3D-457C-B088-3A5042F75D52}"
    SHARED = "{13B669BE-BB05-4DDF-9536-439F39A36129}"


# Map lowercase project-file extension to its type GUID.
EXTENSION_TYPES: dict[str, ProjectTypeGuid] = {
    ".csproj": ProjectTypeGuid.CSHARP_SDK,
    ".fsproj": ProjectTypeGuid.FSHARP,
    ".vbproj": ProjectTypeGuid.VISUAL_BASIC,
    ".vcxproj": ProjectTypeGuid.CPP,
    ".sqlproj": ProjectTypeGuid.SQL,
    ".esproj": ProjectTypeGuid.JAVASCRIPT,
    ".njsproj": ProjectTypeGuid.NODE,
    ".pyproj": ProjectTypeGuid.PYTHON,
    ".proj": ProjectTypeGuid.SHARED,
}


def project_type_for(project_path: str) -> str:
    """Return the type GUID for a project file, by extension.

    Unknown extensions fall back to the C# SDK GUID, which is what most
    tooling assumes for an unrecognized MSBuild project.
    """
    suffix = PurePath(project_path.replace("\\", "/")).suffix.lower()
    return str(EXTENSION_TYPES.get(suffix, ProjectTypeGuid.CSHARP_SDK))


def is_solution_folder(type_guid: str) -> bool:
    """Check whether a type GUID denotes a solution folder."""
    return type_guid.upper() == ProjectTypeGuid.SOLUTION_FOLDER
