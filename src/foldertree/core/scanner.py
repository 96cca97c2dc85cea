from __future__ import annotations

"""
Directory Scanning Service.

Builds immutable descriptor trees from a real (or in-memory) directory.
Shallow scans describe immediate children only, leaving nested folders as
unscanned placeholders; deep scans populate every descendant recursively.

Skip policy: an entry that disappears between the directory listing and the
metadata read, or a directory that cannot be listed (permission denied),
is skipped with a warning (default), or reported through TransientIOError
when the scanner is created with skip_vanished=False. Entries that are
neither regular files nor directories (FIFOs, sockets, dangling symlinks)
are always left out.
"""

import logging
from typing import List, Optional

from foldertree.domain.descriptors import Descriptor, FileDescriptor, FolderDescriptor
from foldertree.domain.errors import NotFoundError, TransientIOError
from foldertree.domain.ports import DirEntry, FilesystemGateway, PathUtility
from foldertree.infra.fs import DEFAULT_FILESYSTEM
from foldertree.infra.paths import DEFAULT_PATHS

logger = logging.getLogger(__name__)


# ==============================================================================
# SCANNER SERVICE
# ==============================================================================

class Scanner:
    """
    Filesystem-to-descriptor-tree builder.

    Args:
        fs: Filesystem gateway. Defaults to the local disk.
        paths: Path utility. Defaults to slash-normalizing helpers.
        skip_vanished: Skip entries that vanish mid-scan or cannot be listed
                       instead of raising.
    """

    def __init__(
            self,
            fs: Optional[FilesystemGateway] = None,
            paths: Optional[PathUtility] = None,
            skip_vanished: bool = True,
    ):
        self.fs = fs if fs is not None else DEFAULT_FILESYSTEM
        self.paths = paths if paths is not None else DEFAULT_PATHS
        self.skip_vanished = skip_vanished

    def scan(self, path: str, deep: bool = False) -> FolderDescriptor:
        """
        Describe the directory at path.

        A path that is not an existing directory is not an error: the result
        is a folder descriptor with exists=False and no contents.

        Args:
            path: Candidate directory path.
            deep: Recursively scan nested folders instead of leaving
                  placeholders.

        Returns:
            FolderDescriptor: Snapshot of the directory.

        Raises:
            TransientIOError: An entry vanished mid-scan, or a directory could
                              not be listed, and skip_vanished is False.
        """
        root = self.paths.absolute(path)
        logger.info(f"Scanning {'deep' if deep else 'shallow'}: {root}")
        result = self._scan_folder(root, deep)
        if not result.exists:
            logger.info(f"Scan target does not exist: {root}")
        return result

    # -------------------------------------------------------------------------
    # RECURSION
    # -------------------------------------------------------------------------

    def _scan_folder(self, folder_path: str, deep: bool) -> FolderDescriptor:
        name = self.paths.folder_name(folder_path)
        if not self.fs.is_directory(folder_path):
            return FolderDescriptor(path=folder_path, name=name, exists=False)

        contents: List[Descriptor] = []
        for entry in self._list(folder_path):
            child = self._describe_child(folder_path, entry, deep)
            if child is not None:
                contents.append(child)

        return FolderDescriptor(path=folder_path, name=name, exists=True, contents=tuple(contents))

    def _describe_child(self, parent: str, entry: DirEntry, deep: bool) -> Optional[Descriptor]:
        child_path = self.paths.join(parent, entry.name)

        if entry.is_directory:
            if deep:
                sub = self._scan_folder(child_path, True)
                if not sub.exists:
                    return self._skip(child_path, "directory removed during scan")
                return sub
            logger.debug(f"Placeholder folder: {child_path}")
            return FolderDescriptor(
                path=child_path,
                name=self.paths.folder_name(child_path),
                exists=True,
                scanned=False,
            )

        if entry.special:
            logger.debug(f"Skipping '{child_path}': not a regular file or directory")
            return None

        try:
            return FileDescriptor.from_path(child_path, self.fs, self.paths)
        except NotFoundError:
            if self.fs.exists(child_path):
                logger.debug(f"Skipping '{child_path}': no longer a regular file")
                return None
            return self._skip(child_path, "file removed during scan")
        except OSError as e:
            return self._skip(child_path, str(e))

    def _list(self, folder_path: str) -> List[DirEntry]:
        try:
            return self.fs.list_children(folder_path)
        except OSError as e:
            self._skip(folder_path, f"listing failed: {e}")
            return []

    def _skip(self, path: str, reason: str) -> None:
        """Apply the skip policy to an entry that vanished or cannot be read."""
        if not self.skip_vanished:
            raise TransientIOError(path, reason)
        logger.warning(f"Skipping '{path}': {reason}")
        return None


# ==============================================================================
# PUBLIC API
# ==============================================================================

def scan_folder(path: str, deep: bool = False) -> FolderDescriptor:
    """
    Scan a directory on the local disk with the default policy.

    Args:
        path: Candidate directory path.
        deep: Recursively populate nested folders.

    Returns:
        FolderDescriptor: Snapshot of the directory.
    """
    return Scanner().scan(path, deep=deep)
