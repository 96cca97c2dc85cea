from __future__ import annotations

"""
Descriptor Tree Data Models.

Provides the immutable node types (files and folders) that make up a
scanned directory snapshot, along with the read-only traversals exposed on
folders. The node family is closed: every traversal dispatches on exactly
FileDescriptor and FolderDescriptor and rejects anything else.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from foldertree.domain.errors import NotFoundError
from foldertree.domain.ports import FilesystemGateway, PathUtility

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

class DescriptorKind(str, Enum):
    """Discriminator of the descriptor variant."""

    FILE = "file"
    FOLDER = "folder"


# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Descriptor(ABC):
    """
    Abstract base holding the common fields of every node in a descriptor
    tree. Only FileDescriptor and FolderDescriptor are instantiated.

    Attributes:
        path: Absolute, slash-normalized path of the entry.
        name: File base name without extension, or the folder's own name.
    """
    path: str
    name: str

    @property
    @abstractmethod
    def kind(self) -> DescriptorKind:
        """Variant discriminator."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation of the node (and its subtree)."""


@dataclass(frozen=True)
class FileDescriptor(Descriptor):
    """
    Leaf entry (regular file) of a descriptor tree.

    Attributes:
        extension: Lowercase extension without the leading dot ("" if none).
        size: Size in bytes.
        modified_time: Last modification time, None if unavailable.
        file_name: Name of the file as found on disk, extension included
                   with its original case. Derived from name and
                   extension when not given.
    """
    extension: str = ""
    size: int = 0
    modified_time: Optional[datetime] = None
    file_name: str = ""

    def __post_init__(self) -> None:
        if not self.file_name:
            leaf = f"{self.name}.{self.extension}" if self.extension else self.name
            object.__setattr__(self, "file_name", leaf)

    @property
    def kind(self) -> DescriptorKind:
        return DescriptorKind.FILE

    @classmethod
    def from_path(cls, path: str, fs: FilesystemGateway, paths: PathUtility) -> FileDescriptor:
        """
        Build a descriptor for an existing regular file.

        Args:
            path: File location.
            fs: Gateway used to confirm existence and read metadata.
            paths: Path helpers used to derive name and extension.

        Returns:
            FileDescriptor: Snapshot of the file metadata.

        Raises:
            NotFoundError: If the gateway does not report a regular file at
                           path, or the file vanishes while being inspected.
        """
        clean = paths.sanitize(path)
        if not fs.is_file(clean):
            raise NotFoundError(clean)
        try:
            size = fs.file_size(clean)
        except FileNotFoundError:
            raise NotFoundError(clean) from None
        return cls(
            path=clean,
            name=paths.base_name(clean),
            extension=paths.extension(clean).lower(),
            size=size,
            modified_time=fs.modified_time(clean),
            file_name=paths.folder_name(clean),
        )

    def matches(self, extension_map: Mapping[str, Sequence[str]], category: Optional[str] = None) -> bool:
        """Check this file against an extension/category table."""
        from foldertree.domain.extensions import is_valid_extension

        return is_valid_extension(extension_map, self.file_name, category)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "name": self.name,
            "file_name": self.file_name,
            "path": self.path,
            "extension": self.extension,
            "size": self.size,
            "modified": self.modified_time.isoformat() if self.modified_time else None,
        }


@dataclass(frozen=True)
class FolderDescriptor(Descriptor):
    """
    Directory entry of a descriptor tree.

    A folder produced by a shallow scan for a nested directory is a
    placeholder: scanned is False and contents is empty even when the
    directory on disk is not. Query results over such folders only reflect
    what was actually scanned.

    Attributes:
        exists: Whether the directory existed when it was scanned.
        contents: Children in discovery order.
        scanned: False for shallow-scan placeholders.
    """
    exists: bool = False
    contents: Tuple[Descriptor, ...] = field(default_factory=tuple)
    scanned: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.contents, tuple):
            object.__setattr__(self, "contents", tuple(self.contents))
        if not self.exists and self.contents:
            raise ValueError(f"Missing folder cannot have contents: {self.path}")

    @property
    def kind(self) -> DescriptorKind:
        return DescriptorKind.FOLDER

    # --- Queries ---

    def get_files(self, deep: bool = False) -> List[FileDescriptor]:
        """
        Collect file descriptors.

        Args:
            deep: Also collect files of nested folders, spliced in place of
                  each folder, left to right.

        Returns:
            List[FileDescriptor]: Files in traversal order.
        """
        files: List[FileDescriptor] = []
        for item in self.contents:
            if isinstance(item, FileDescriptor):
                files.append(item)
            elif isinstance(item, FolderDescriptor):
                if deep:
                    files.extend(item.get_files(True))
            else:
                _reject(item)
        return files

    def get_folders(self, deep: bool = False) -> List[FolderDescriptor]:
        """
        Collect folder descriptors.

        Args:
            deep: Follow each folder with its own nested folders.

        Returns:
            List[FolderDescriptor]: Folders in traversal order.
        """
        folders: List[FolderDescriptor] = []
        for item in self.contents:
            if isinstance(item, FolderDescriptor):
                folders.append(item)
                if deep:
                    folders.extend(item.get_folders(True))
            elif not isinstance(item, FileDescriptor):
                _reject(item)
        return folders

    def get_contents(self, deep: bool = False) -> List[Descriptor]:
        """
        Flatten the whole subtree: each child, and for folders their full
        contents right after them.

        The deep flag is accepted for signature symmetry with get_files and
        get_folders but does not change the result; the subtree is always
        flattened.
        """
        return list(self.iter_descriptors())

    def get_paths(self, deep: bool = False) -> List[str]:
        """Paths of every descriptor get_contents would return, same order."""
        return [item.path for item in self.iter_descriptors()]

    def iter_descriptors(self) -> Iterator[Descriptor]:
        """Depth-first, pre-order walk over every descendant."""
        for item in self.contents:
            if isinstance(item, FolderDescriptor):
                yield item
                yield from item.iter_descriptors()
            elif isinstance(item, FileDescriptor):
                yield item
            else:
                _reject(item)

    def find(self, name: str) -> Optional[Descriptor]:
        """
        Return the first descendant called name, or None.

        Files match on either their base name or their full file name.
        """
        for item in self.iter_descriptors():
            if item.name == name:
                return item
            if isinstance(item, FileDescriptor) and item.file_name == name:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "name": self.name,
            "path": self.path,
            "exists": self.exists,
            "scanned": self.scanned,
            "contents": [item.to_dict() for item in self.contents],
        }


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _reject(item: object) -> None:
    """Fail loudly on a node outside the closed descriptor family."""
    raise TypeError(f"Unsupported descriptor node: {type(item).__name__}")
