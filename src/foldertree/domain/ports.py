from __future__ import annotations

"""
Capability Contracts.

Structural interfaces for the two collaborators the scanning and
materialization services depend on. Concrete implementations live in the
infrastructure layer and are injected through constructors, so an in-memory
filesystem can replace the local disk transparently.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol

# -----------------------------------------------------------------------------
# VALUE OBJECTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirEntry:
    """
    A single entry reported by a directory listing.

    Attributes:
        name: Entry name relative to the listed directory.
        is_directory: True when the entry is a directory.
        special: True when the entry is neither a directory nor a regular
                 file (FIFO, socket, device, dangling symlink).
    """
    name: str
    is_directory: bool
    special: bool = False


# -----------------------------------------------------------------------------
# CONTRACTS
# -----------------------------------------------------------------------------

class PathUtility(Protocol):
    """Pure string manipulation of slash-separated paths."""

    def join(self, *segments: str) -> str: ...

    def sanitize(self, path: str) -> str: ...

    def extension(self, name: str) -> str: ...

    def base_name(self, name: str) -> str: ...

    def folder_name(self, path: str) -> str: ...

    def absolute(self, path: str) -> str: ...


class FilesystemGateway(Protocol):
    """Blocking filesystem queries and directory creation."""

    def exists(self, path: str) -> bool: ...

    def is_directory(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...

    def list_children(self, path: str) -> List[DirEntry]: ...

    def file_size(self, path: str) -> int: ...

    def modified_time(self, path: str) -> Optional[datetime]: ...

    def create_directory(self, path: str, recursive: bool = True) -> bool: ...
