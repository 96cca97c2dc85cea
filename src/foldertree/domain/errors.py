from __future__ import annotations

"""
Domain Error Hierarchy.

Defines the failure kinds surfaced by the scanning and materialization
services. Every error derives from FolderTreeError and from the closest builtin
exception (FileNotFoundError, OSError or ValueError).
"""

from typing import Optional

# -----------------------------------------------------------------------------
# BASE ERROR
# -----------------------------------------------------------------------------

class FolderTreeError(Exception):
    """Root of all errors raised by the foldertree package."""


# -----------------------------------------------------------------------------
# SCANNING ERRORS
# -----------------------------------------------------------------------------

class NotFoundError(FolderTreeError, FileNotFoundError):
    """
    Raised when a file descriptor is requested for a path that is not an
    existing regular file.

    Attributes:
        path: The offending path.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path does not point to a valid file: {path}")


class TransientIOError(FolderTreeError, OSError):
    """
    Raised when an entry disappears between directory listing and metadata
    read, and the scanner is configured not to skip it.

    Attributes:
        path: The entry that vanished.
        reason: Underlying error message, if any.
    """

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason or "entry vanished during scan"
        super().__init__(f"Transient I/O failure at '{path}': {self.reason}")


# -----------------------------------------------------------------------------
# MATERIALIZATION ERRORS
# -----------------------------------------------------------------------------

class DirectoryCreationError(FolderTreeError, OSError):
    """
    Raised when a directory of a tree spec cannot be created for a reason
    other than it already existing.

    Attributes:
        key_path: Slash-joined spec keys leading to the failing node.
        path: Filesystem path that could not be created.
        reason: Underlying error message.
    """

    def __init__(self, key_path: str, path: str, reason: str):
        self.key_path = key_path
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to create directory for key '{key_path}' at '{path}': {reason}")


class InvalidSpecError(FolderTreeError, ValueError):
    """
    Raised when a tree spec is malformed JSON, is not object-shaped, or
    contains a key or value that cannot describe a directory.

    Attributes:
        key_path: Slash-joined spec keys leading to the invalid node
                  (empty for top-level problems).
    """

    def __init__(self, message: str, key_path: str = ""):
        self.key_path = key_path
        if key_path:
            message = f"{message} (at '{key_path}')"
        super().__init__(message)
