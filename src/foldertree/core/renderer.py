from __future__ import annotations

"""
Tree Renderer.

Converts descriptor trees and materializer mirror trees into visual ASCII
representations for terminal output. Entries keep the order of the
underlying tree (discovery order or spec order).
"""

from typing import List

from foldertree.domain.descriptors import FileDescriptor, FolderDescriptor
from foldertree.domain.tree_spec import MirrorTree

PLACEHOLDER_MARK = " [not scanned]"
MISSING_MARK = " (missing)"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_descriptor_tree(folder: FolderDescriptor) -> List[str]:
    """
    Render a scanned folder as ASCII tree lines.

    The first line is the folder itself; missing folders render as a single
    line marked "(missing)".

    Args:
        folder: Root of the descriptor tree.

    Returns:
        List[str]: Visual lines of the tree.
    """
    if not folder.exists:
        return [f"{folder.name}/{MISSING_MARK}"]

    lines: List[str] = [f"{folder.name}/"]
    _render_contents(folder, lines, prefix="")
    return lines


def render_mirror_tree(mirror: MirrorTree, root_label: str = "") -> List[str]:
    """
    Render a materializer mirror tree as ASCII tree lines.

    Args:
        mirror: Result of a tree materialization.
        root_label: Optional first line (usually the root path).

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = [root_label] if root_label else []
    _render_mirror(mirror, lines, prefix="")
    return lines

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _render_contents(folder: FolderDescriptor, lines: List[str], prefix: str) -> None:
    """Recursively append one line per child using ├── / └── connectors."""
    total = len(folder.contents)

    for i, node in enumerate(folder.contents):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        if isinstance(node, FolderDescriptor):
            mark = "" if node.scanned else PLACEHOLDER_MARK
            lines.append(f"{prefix}{connector}{node.name}/{mark}")
            _render_contents(node, lines, prefix + ("    " if is_last else "│   "))
        elif isinstance(node, FileDescriptor):
            lines.append(f"{prefix}{connector}{node.file_name}")
        else:
            raise TypeError(f"Unsupported descriptor node: {type(node).__name__}")


def _render_mirror(mirror: MirrorTree, lines: List[str], prefix: str) -> None:
    """Recursively append one line per mirror node."""
    keys = list(mirror.keys())
    total = len(keys)

    for i, key in enumerate(keys):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{key}/")
        _render_mirror(mirror[key].children, lines, prefix + ("    " if is_last else "│   "))
