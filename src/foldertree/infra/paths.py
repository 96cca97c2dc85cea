from __future__ import annotations

"""
Slash Path Utilities.

Pure string helpers for joining and normalizing paths with forward slashes,
and for splitting file names into base name and extension. All descriptor
paths produced by the package pass through these helpers so that Windows and
POSIX callers observe the same representation.
"""

import os
import re
from typing import Optional

# -----------------------------------------------------------------------------
# PATTERNS
# -----------------------------------------------------------------------------

_SEPARATORS_RX = re.compile(r"[\\/]+")
_EXTENSION_RX = re.compile(r"\.([^./]+)$")

# -----------------------------------------------------------------------------
# PATH UTILITY
# -----------------------------------------------------------------------------

class SlashPaths:
    """
    Default PathUtility implementation.

    Stateless; a single shared instance (DEFAULT_PATHS) is enough for the
    whole process.
    """

    def sanitize(self, path: str) -> str:
        """
        Convert backslashes to '/' and collapse repeated separators.

        Idempotent: sanitize(sanitize(p)) == sanitize(p).
        """
        return _SEPARATORS_RX.sub("/", path or "")

    def join(self, *segments: str) -> str:
        """
        Join path segments with '/', dropping empty segments.

        Args:
            *segments: Path fragments in order.

        Returns:
            str: The sanitized joined path, or "" when every segment is empty.
        """
        parts = [s for s in segments if s]
        if not parts:
            return ""
        return self.sanitize("/".join(parts))

    def leaf(self, path: str) -> str:
        """Return the last non-empty segment of a path."""
        clean = self.sanitize(path).rstrip("/")
        return clean.rsplit("/", 1)[-1]

    def extension(self, name: str) -> str:
        """
        Extract the text after the last dot of the final path segment.

        Names whose only dot is the leading one (".gitignore") have no
        extension. Case is preserved.
        """
        leaf = self.leaf(name)
        if not leaf.lstrip("."):
            return ""
        match = _EXTENSION_RX.search(leaf)
        if not match or match.start() == 0:
            return ""
        return match.group(1)

    def base_name(self, name: str) -> str:
        """Return the final path segment with its last extension removed."""
        leaf = self.leaf(name)
        ext = self.extension(leaf)
        if not ext:
            return leaf
        return leaf[: -(len(ext) + 1)]

    def strip_extension(self, name: str) -> str:
        """Remove the last extension of a name, keeping any directory part."""
        ext = self.extension(name)
        clean = self.sanitize(name)
        if not ext:
            return clean
        return clean[: -(len(ext) + 1)]

    def folder_name(self, path: str) -> str:
        """Return a folder's own name (its last segment, dots kept)."""
        return self.leaf(path)

    def absolute(self, path: str) -> str:
        """Resolve a path against the working directory and sanitize it."""
        return self.sanitize(os.path.abspath(self.sanitize(path)))

    def resolve(self, relative_path: str, base_path: Optional[str] = None) -> str:
        """
        Resolve a relative path against a base directory.

        Args:
            relative_path: Path to resolve. Absolute paths are returned as-is
                           (sanitized).
            base_path: Base directory. Defaults to the working directory.

        Returns:
            str: Absolute, slash-normalized path.
        """
        base = base_path if base_path else os.getcwd()
        return self.sanitize(os.path.abspath(os.path.join(base, relative_path)))


DEFAULT_PATHS = SlashPaths()
