from __future__ import annotations

"""
In-Memory Filesystem Gateway.

A dictionary-backed FilesystemGateway for tests and dry experiments. Paths
are slash-normalized absolute strings; listing order is insertion order,
which makes scans over it fully deterministic.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Set

from foldertree.domain.ports import DirEntry
from foldertree.infra.paths import DEFAULT_PATHS

# -----------------------------------------------------------------------------
# STORAGE NODES
# -----------------------------------------------------------------------------

@dataclass
class _MemoryFile:
    content: str = ""
    modified: Optional[datetime] = None


@dataclass
class _MemoryDir:
    children: Dict[str, object] = field(default_factory=dict)


@dataclass
class _MemorySpecial:
    """Stand-in for a FIFO, socket or dangling symlink."""

# -----------------------------------------------------------------------------
# GATEWAY
# -----------------------------------------------------------------------------

class InMemoryFilesystem:
    """
    FilesystemGateway keeping a whole directory tree in memory.

    Besides the gateway contract it offers helpers to seed and mutate the
    tree (add_file, add_directory, add_special, remove) and a set of paths whose
    directory creation is refused, to simulate permission failures.
    """

    def __init__(self) -> None:
        self._root = _MemoryDir()
        self.denied: Set[str] = set()
        self.created: List[str] = []

    # --- Seeding helpers ---

    def add_directory(self, path: str) -> None:
        """Create a directory and any missing parents."""
        self._ensure_dir(self._split(path))

    def add_file(self, path: str, content: str = "", modified: Optional[datetime] = None) -> None:
        """Create (or replace) a file, creating missing parent directories."""
        parts = self._split(path)
        if not parts:
            raise IsADirectoryError(path)
        parent = self._ensure_dir(parts[:-1])
        parent.children[parts[-1]] = _MemoryFile(content=content, modified=modified)

    def add_special(self, path: str) -> None:
        """Create an entry that is neither a file nor a directory."""
        parts = self._split(path)
        if not parts:
            raise IsADirectoryError(path)
        self._ensure_dir(parts[:-1]).children[parts[-1]] = _MemorySpecial()

    def remove(self, path: str) -> None:
        """Delete a file or a whole directory subtree."""
        parts = self._split(path)
        if not parts:
            raise PermissionError("Refusing to remove the root directory")
        parent = self._lookup(parts[:-1])
        if not isinstance(parent, _MemoryDir) or parts[-1] not in parent.children:
            raise FileNotFoundError(path)
        del parent.children[parts[-1]]

    # --- Core gateway contract ---

    def exists(self, path: str) -> bool:
        return self._lookup(self._split(path)) is not None

    def is_directory(self, path: str) -> bool:
        return isinstance(self._lookup(self._split(path)), _MemoryDir)

    def is_file(self, path: str) -> bool:
        return isinstance(self._lookup(self._split(path)), _MemoryFile)

    def list_children(self, path: str) -> List[DirEntry]:
        node = self._lookup(self._split(path))
        if node is None:
            raise FileNotFoundError(path)
        if not isinstance(node, _MemoryDir):
            raise NotADirectoryError(path)
        return [
            DirEntry(
                name=name,
                is_directory=isinstance(child, _MemoryDir),
                special=isinstance(child, _MemorySpecial),
            )
            for name, child in node.children.items()
        ]

    def file_size(self, path: str) -> int:
        return len(self._file(path).content.encode("utf-8"))

    def modified_time(self, path: str) -> Optional[datetime]:
        node = self._lookup(self._split(path))
        if not isinstance(node, _MemoryFile):
            return None
        return node.modified

    def create_directory(self, path: str, recursive: bool = True) -> bool:
        parts = self._split(path)
        if isinstance(self._lookup(parts), _MemoryDir):
            return True
        clean = "/" + "/".join(parts)
        if clean in self.denied:
            raise PermissionError(f"Permission denied: '{clean}'")
        if not recursive and not isinstance(self._lookup(parts[:-1]), _MemoryDir):
            raise FileNotFoundError(f"Parent directory missing: '{clean}'")
        self._ensure_dir(parts)
        self.created.append(clean)
        return True

    def read_text(self, path: str) -> Optional[str]:
        node = self._lookup(self._split(path))
        return node.content if isinstance(node, _MemoryFile) else None

    def write_text(self, path: str, content: str) -> bool:
        self.add_file(path, content)
        return True

    # --- Internals ---

    def _split(self, path: str) -> List[str]:
        return [p for p in DEFAULT_PATHS.sanitize(path).split("/") if p]

    def _lookup(self, parts: List[str]) -> Optional[object]:
        node: object = self._root
        for part in parts:
            if not isinstance(node, _MemoryDir) or part not in node.children:
                return None
            node = node.children[part]
        return node

    def _file(self, path: str) -> _MemoryFile:
        node = self._lookup(self._split(path))
        if not isinstance(node, _MemoryFile):
            raise FileNotFoundError(path)
        return node

    def _ensure_dir(self, parts: List[str]) -> _MemoryDir:
        node = self._root
        for part in parts:
            child = node.children.get(part)
            if child is None:
                child = _MemoryDir()
                node.children[part] = child
            elif not isinstance(child, _MemoryDir):
                raise FileExistsError("/" + "/".join(parts))
            node = child
        return node
