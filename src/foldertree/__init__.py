from __future__ import annotations

"""
foldertree: declarative directory trees.

Scan a directory into an immutable, queryable descriptor tree, or create a
directory tree on disk from a nested mapping (or its JSON text).

    >>> tree = scan_folder("project", deep=True)
    >>> [f.path for f in tree.get_files(deep=True)]
    >>> create_folder_tree({"src": {"main": {}, "test": {}}, "docs": {}}, "out")
"""

from foldertree.core.materializer import TreeMaterializer, create_folder_tree
from foldertree.core.scanner import Scanner, scan_folder
from foldertree.domain.descriptors import (
    Descriptor,
    DescriptorKind,
    FileDescriptor,
    FolderDescriptor,
)
from foldertree.domain.errors import (
    DirectoryCreationError,
    FolderTreeError,
    InvalidSpecError,
    NotFoundError,
    TransientIOError,
)
from foldertree.domain.extensions import DEFAULT_EXTENSION_MAP, is_valid_extension
from foldertree.domain.tree_spec import MirrorNode, parse_tree_spec
from foldertree.infra.fs import LocalFilesystem
from foldertree.infra.memory_fs import InMemoryFilesystem
from foldertree.infra.paths import SlashPaths

__version__ = "1.0.0"

__all__ = [
    "Scanner",
    "scan_folder",
    "TreeMaterializer",
    "create_folder_tree",
    "parse_tree_spec",
    "MirrorNode",
    "Descriptor",
    "DescriptorKind",
    "FileDescriptor",
    "FolderDescriptor",
    "FolderTreeError",
    "NotFoundError",
    "TransientIOError",
    "DirectoryCreationError",
    "InvalidSpecError",
    "DEFAULT_EXTENSION_MAP",
    "is_valid_extension",
    "LocalFilesystem",
    "InMemoryFilesystem",
    "SlashPaths",
]
