"""Tests for solution-folder chain derivation."""

from pathlib import Path

import pytest

from slnctl.domain.errors import MutuallyExclusiveOptionsError
from slnctl.domain.folders import (
    FolderPlacement,
    PlacementMode,
    derive_folder_chain,
    folders_from_relative_path,
    split_folder_path,
)


class TestFoldersFromRelativePath:
    @pytest.mark.parametrize(
        "relative_path,expected",
        [
            ("foo.csproj", []),
            ("foo/foo.csproj", []),
            ("libs/foo/foo.csproj", ["libs"]),
            ("libs/sub/foo/foo.csproj", ["libs", "sub"]),
            ("a/b/c/Proj/Proj.csproj", ["a", "b", "c"]),
        ],
    )
    def test_drops_project_directory(self, relative_path: str, expected: list[str]) -> None:
        assert folders_from_relative_path(relative_path) == expected

    def test_out_of_tree_is_root(self) -> None:
        assert folders_from_relative_path("../shared/x/x.csproj") == []

    def test_strips_current_directory_marker(self) -> None:
        assert folders_from_relative_path("./libs/foo/foo.csproj") == ["libs"]

    def test_accepts_backslashes(self) -> None:
        assert folders_from_relative_path("libs\\sub\\foo\\foo.csproj") == ["libs", "sub"]


class TestDeriveFolderChain:
    def test_absolute_project_under_base(self, tmp_path: Path) -> None:
        project = tmp_path / "libs" / "foo" / "foo.csproj"
        assert derive_folder_chain(tmp_path, project) == ["libs"]

    def test_project_directly_in_base(self, tmp_path: Path) -> None:
        assert derive_folder_chain(tmp_path, tmp_path / "foo.csproj") == []

    def test_project_outside_tree(self, tmp_path: Path) -> None:
        base = tmp_path / "repo"
        project = tmp_path / "shared" / "x" / "x.csproj"
        assert derive_folder_chain(base, project) == []

    def test_relative_input_used_as_is(self, tmp_path: Path) -> None:
        assert derive_folder_chain(tmp_path, "../shared/x.csproj") == []

    def test_force_root_ignores_layout(self, tmp_path: Path) -> None:
        project = tmp_path / "libs" / "sub" / "foo" / "foo.csproj"
        placement = FolderPlacement(mode=PlacementMode.ROOT)
        assert derive_folder_chain(tmp_path, project, placement) is None

    def test_explicit_chain_verbatim(self, tmp_path: Path) -> None:
        project = tmp_path / "libs" / "sub" / "foo" / "foo.csproj"
        placement = FolderPlacement(mode=PlacementMode.EXPLICIT, folders=("Custom", "Deep"))
        assert derive_folder_chain(tmp_path, project, placement) == ["Custom", "Deep"]

    def test_deterministic(self, tmp_path: Path) -> None:
        project = tmp_path / "libs" / "sub" / "foo" / "foo.csproj"
        first = derive_folder_chain(tmp_path, project)
        second = derive_folder_chain(tmp_path, project)
        assert first == second == ["libs", "sub"]


class TestFolderPlacement:
    def test_default_is_auto(self) -> None:
        assert FolderPlacement.from_options().mode is PlacementMode.AUTO

    def test_in_root(self) -> None:
        assert FolderPlacement.from_options(in_root=True).mode is PlacementMode.ROOT

    def test_solution_folder_is_split(self) -> None:
        placement = FolderPlacement.from_options(solution_folder="libs/core\\data")
        assert placement.mode is PlacementMode.EXPLICIT
        assert placement.folders == ("libs", "core", "data")

    def test_empty_solution_folder_means_auto(self) -> None:
        assert FolderPlacement.from_options(solution_folder="").mode is PlacementMode.AUTO

    def test_mutually_exclusive(self) -> None:
        with pytest.raises(MutuallyExclusiveOptionsError) as exc_info:
            FolderPlacement.from_options(in_root=True, solution_folder="libs")
        assert exc_info.value.code == "MUTUALLY_EXCLUSIVE"

    def test_frozen(self) -> None:
        placement = FolderPlacement()
        with pytest.raises(Exception):
            placement.mode = PlacementMode.ROOT  # type: ignore[misc]


def test_split_folder_path_drops_empty_segments() -> None:
    assert split_folder_path("/libs//core/") == ("libs", "core")
