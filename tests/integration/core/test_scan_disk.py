from __future__ import annotations

"""
Integration tests for scanning real directories.

Listing order on disk is filesystem-defined, so these tests compare sets or
sorted paths; exact ordering is covered by the in-memory unit tests.
"""

import os
from pathlib import Path

import pytest

from foldertree import Scanner, create_folder_tree, scan_folder
from foldertree.domain.descriptors import FileDescriptor, FolderDescriptor


def slash(path: Path) -> str:
    return path.as_posix()


def test_missing_directory(tmp_path: Path) -> None:
    result = scan_folder(str(tmp_path / "missing"))
    assert result.exists is False
    assert result.contents == ()


def test_shallow_scan_of_project(disk_project: Path) -> None:
    result = scan_folder(str(disk_project))

    assert result.exists is True
    assert result.path == slash(disk_project)
    assert result.name == "proj"
    assert {f.file_name for f in result.get_files(False)} == {"README.md", "archive.tar.gz"}
    assert {f.name for f in result.get_folders(False)} == {"src", "docs"}
    assert all(not f.scanned and f.contents == () for f in result.get_folders(False))


def test_deep_scan_reaches_every_descendant(disk_project: Path) -> None:
    result = scan_folder(str(disk_project), deep=True)

    expected = {
        "README.md", "archive.tar.gz", "src", "src/main.py",
        "src/lib", "src/lib/util.py", "docs",
    }
    assert set(result.get_paths()) == {f"{slash(disk_project)}/{p}" for p in expected}


def test_file_metadata_from_disk(disk_project: Path) -> None:
    result = scan_folder(str(disk_project))
    readme = next(f for f in result.get_files(False) if f.file_name == "README.md")

    assert isinstance(readme, FileDescriptor)
    assert readme.name == "README"
    assert readme.extension == "md"
    assert readme.size == len("# Project")
    assert readme.modified_time is not None


def test_nested_file_only_visible_when_deep(tmp_path: Path) -> None:
    root = tmp_path / "R"
    (root / "sub").mkdir(parents=True)
    (root / "sub" / "inner.txt").write_text("x", encoding="utf-8")

    assert scan_folder(str(root), deep=False).get_files(False) == []
    assert [f.path for f in scan_folder(str(root), deep=True).get_files(True)] == [
        f"{slash(root)}/sub/inner.txt"
    ]


def test_paths_are_unique_and_prefixed(disk_project: Path) -> None:
    result = scan_folder(str(disk_project), deep=True)
    paths = result.get_paths()

    assert len(paths) == len(set(paths))
    assert all(p.startswith(slash(disk_project) + "/") for p in paths)


def test_file_and_folder_views_partition_contents(disk_project: Path) -> None:
    result = scan_folder(str(disk_project), deep=True)
    files = result.get_files(True)
    folders = result.get_folders(True)

    assert len(files) + len(folders) == len(result.get_contents())
    assert all(isinstance(f, FolderDescriptor) for f in folders)


def test_create_then_scan_round_trip(tmp_path: Path) -> None:
    create_folder_tree({"a": {}, "b": {}}, str(tmp_path))

    result = scan_folder(str(tmp_path))
    assert {f.name for f in result.get_folders(False)} == {"a", "b"}
    assert result.get_files(False) == []


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires POSIX FIFOs and symlinks")
@pytest.mark.parametrize("skip_vanished", [True, False])
def test_fifo_and_dangling_symlink_are_left_out(tmp_path: Path, skip_vanished: bool) -> None:
    (tmp_path / "real.txt").write_text("x", encoding="utf-8")
    os.mkfifo(tmp_path / "pipe")
    os.symlink(tmp_path / "gone", tmp_path / "dangling")

    result = Scanner(skip_vanished=skip_vanished).scan(str(tmp_path))

    assert [f.file_name for f in result.get_files(False)] == ["real.txt"]
    assert result.get_folders(False) == []


def test_mixed_case_file_name_is_preserved(tmp_path: Path) -> None:
    (tmp_path / "README.MD").write_text("# Title", encoding="utf-8")

    result = scan_folder(str(tmp_path))
    readme = result.find("README.MD")

    assert isinstance(readme, FileDescriptor)
    assert readme.file_name == "README.MD"
    assert readme.extension == "md"
