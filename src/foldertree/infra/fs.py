from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the local-disk FilesystemGateway used by the scanner and the tree
materializer, together with user data directory resolution and the file
convenience operations (read/write, copy/move/delete, JSON persistence)
exposed by the package facade. Acts as an abstraction over the 'os' and
'shutil' modules to ensure uniform behavior across Windows and Unix-like
systems.
"""

import json
import logging
import os
import re
import shutil
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple, Union

from foldertree.domain.ports import DirEntry

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "foldertree"
UNIX_APP_DIR_NAME = ".foldertree"

FileFilter = Union[str, "re.Pattern[str]", Callable[[str], bool]]

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/foldertree
    - Linux/Mac: ~/.foldertree

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    safe_mkdir(path)
    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)

# -----------------------------------------------------------------------------
# LOCAL FILESYSTEM GATEWAY
# -----------------------------------------------------------------------------

class LocalFilesystem:
    """
    FilesystemGateway backed by the local disk.

    Query methods never raise for missing paths (they answer False/None),
    except the metadata reads used while scanning (file_size), which raise
    FileNotFoundError so the scanner can apply its vanished-entry policy.
    """

    # --- Core gateway contract ---

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def list_children(self, path: str) -> List[DirEntry]:
        """
        List the immediate children of a directory in filesystem order.

        Entries that are neither directories nor regular files (FIFOs,
        sockets, devices, dangling symlinks) are flagged special.

        Raises:
            FileNotFoundError: If the directory no longer exists.
            NotADirectoryError: If the path is not a directory.
        """
        entries: List[DirEntry] = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                    is_file = is_dir or entry.is_file()
                except OSError:
                    # let the metadata read decide
                    is_dir, is_file = False, True
                entries.append(DirEntry(name=entry.name, is_directory=is_dir, special=not is_file))
        return entries

    def file_size(self, path: str) -> int:
        return os.stat(path).st_size

    def modified_time(self, path: str) -> Optional[datetime]:
        try:
            return datetime.fromtimestamp(os.stat(path).st_mtime)
        except (OSError, OverflowError, ValueError):
            return None

    def create_directory(self, path: str, recursive: bool = True) -> bool:
        """
        Create a directory, treating an existing directory as success.

        Args:
            path: Directory to create.
            recursive: Create missing parents as well.

        Returns:
            bool: True once the directory exists.

        Raises:
            OSError: On any failure other than the directory already existing
                     (permission denied, a file in the way, invalid name...).
        """
        if os.path.isdir(path):
            return True
        try:
            if recursive:
                os.makedirs(path, exist_ok=True)
            else:
                os.mkdir(path)
        except FileExistsError:
            if os.path.isdir(path):
                return True
            raise
        logger.debug(f"Directory created: {path}")
        return True

    # --- File convenience operations ---

    def read_text(self, path: str, encoding: str = "utf-8") -> Optional[str]:
        """Read a text file, returning None when it is missing or unreadable."""
        if not os.path.isfile(path):
            return None
        try:
            with open(path, "r", encoding=encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read '{path}': {e}")
            return None

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> bool:
        """Write a text file, replacing any previous content."""
        try:
            with open(path, "w", encoding=encoding) as f:
                f.write(content)
            return True
        except OSError as e:
            logger.error(f"Failed to write '{path}': {e}")
            return False

    def copy_file(self, source: str, destination: str, overwrite: bool = False) -> bool:
        """Copy a file. Refuses to replace an existing destination unless asked."""
        if not os.path.isfile(source):
            return False
        if os.path.exists(destination) and not overwrite:
            return False
        try:
            shutil.copy2(source, destination)
            return True
        except OSError as e:
            logger.error(f"Failed to copy '{source}' to '{destination}': {e}")
            return False

    def move_file(self, source: str, destination: str, overwrite: bool = False) -> bool:
        """Move a file. Refuses to replace an existing destination unless asked."""
        if not os.path.isfile(source):
            return False
        if os.path.exists(destination) and not overwrite:
            return False
        try:
            shutil.move(source, destination)
            return True
        except OSError as e:
            logger.error(f"Failed to move '{source}' to '{destination}': {e}")
            return False

    def delete_file(self, path: str) -> bool:
        if not os.path.isfile(path):
            return False
        try:
            os.remove(path)
            return True
        except OSError as e:
            logger.error(f"Failed to delete '{path}': {e}")
            return False

    def remove_directory(self, path: str, recursive: bool = False) -> bool:
        """
        Remove a directory.

        Without recursive, only an empty directory is removed.
        """
        if not os.path.isdir(path):
            return False
        try:
            if recursive:
                shutil.rmtree(path)
            else:
                os.rmdir(path)
            return True
        except OSError as e:
            logger.error(f"Failed to remove directory '{path}': {e}")
            return False

    def list_files(self, path: str, file_filter: Optional[FileFilter] = None) -> List[str]:
        """
        List the regular files directly inside a directory.

        Args:
            path: Directory to inspect.
            file_filter: Regex (string or compiled) matched against the file
                         name with search semantics, or a predicate receiving
                         the full path.

        Returns:
            List[str]: Full paths of matching files, in filesystem order.
        """
        if not os.path.isdir(path):
            return []

        predicate: Optional[Callable[[str], bool]] = None
        if isinstance(file_filter, str):
            rx = re.compile(file_filter)
            predicate = lambda p: bool(rx.search(os.path.basename(p)))
        elif isinstance(file_filter, re.Pattern):
            rx_compiled = file_filter
            predicate = lambda p: bool(rx_compiled.search(os.path.basename(p)))
        elif callable(file_filter):
            predicate = file_filter

        out: List[str] = []
        for entry in self.list_children(path):
            if entry.is_directory:
                continue
            full = os.path.join(path, entry.name)
            if predicate is None or predicate(full):
                out.append(full)
        return out

    def read_json(self, path: str) -> Optional[Any]:
        """Load a JSON document, returning None when missing or invalid."""
        content = self.read_text(path)
        if not content:
            return None
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in '{path}': {e}")
            return None

    def write_json(self, path: str, data: Any) -> bool:
        """Serialize data as JSON. Returns False for unserializable data."""
        try:
            payload = json.dumps(data, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            logger.error(f"Data for '{path}' is not JSON serializable: {e}")
            return False
        return self.write_text(path, payload)


DEFAULT_FILESYSTEM = LocalFilesystem()
