from __future__ import annotations

"""
Unit tests for the Tree Renderer.
"""

from foldertree.core.renderer import render_descriptor_tree, render_mirror_tree
from foldertree.core.scanner import Scanner
from foldertree.domain.descriptors import FolderDescriptor
from foldertree.domain.tree_spec import MirrorNode
from foldertree.infra.memory_fs import InMemoryFilesystem


def test_render_deep_scan(memory_fs: InMemoryFilesystem) -> None:
    lines = render_descriptor_tree(Scanner(fs=memory_fs).scan("/proj", deep=True))
    assert lines == [
        "proj/",
        "├── README.md",
        "├── src/",
        "│   ├── main.py",
        "│   └── lib/",
        "│       └── util.py",
        "├── archive.tar.gz",
        "└── docs/",
    ]


def test_render_marks_placeholders(memory_fs: InMemoryFilesystem) -> None:
    lines = render_descriptor_tree(Scanner(fs=memory_fs).scan("/proj"))
    assert "├── src/ [not scanned]" in lines
    assert "└── docs/ [not scanned]" in lines


def test_render_missing_folder() -> None:
    missing = FolderDescriptor(path="/x/gone", name="gone", exists=False)
    assert render_descriptor_tree(missing) == ["gone/ (missing)"]


def test_render_mirror_tree() -> None:
    mirror = {
        "src": MirrorNode("/r/src", {"main": MirrorNode("/r/src/main")}),
        "docs": MirrorNode("/r/docs"),
    }
    assert render_mirror_tree(mirror, root_label="/r") == [
        "/r",
        "├── src/",
        "│   └── main/",
        "└── docs/",
    ]


def test_render_keeps_file_name_case() -> None:
    fs = InMemoryFilesystem()
    fs.add_file("/r/README.MD")

    assert render_descriptor_tree(Scanner(fs=fs).scan("/r")) == ["r/", "└── README.MD"]
