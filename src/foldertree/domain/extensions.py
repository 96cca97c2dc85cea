from __future__ import annotations

"""
File Extension Classification.

Static lookup of file extensions to application categories, and the
validation helper that checks a file name against such a table.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from foldertree.infra.paths import DEFAULT_PATHS

# -----------------------------------------------------------------------------
# DEFAULT TABLE
# -----------------------------------------------------------------------------

DEFAULT_EXTENSION_MAP: Dict[str, List[str]] = {
    "txt": ["text", "document"],
    "md": ["text", "document"],
    "json": ["data", "text"],
    "csv": ["data", "text"],
    "xml": ["data", "text"],
    "yaml": ["data", "text"],
    "yml": ["data", "text"],
    "pdf": ["document"],
    "png": ["image"],
    "jpg": ["image"],
    "jpeg": ["image"],
    "gif": ["image"],
    "svg": ["image", "vector"],
    "psd": ["image"],
    "ai": ["vector"],
    "eps": ["vector"],
    "mp3": ["audio"],
    "wav": ["audio"],
    "mp4": ["video"],
    "mov": ["video"],
    "zip": ["archive"],
    "gz": ["archive"],
    "py": ["code", "text"],
    "js": ["code", "text"],
    "ts": ["code", "text"],
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def is_valid_extension(
        extension_map: Mapping[str, Sequence[str]],
        file_path: str,
        category: Optional[str] = None,
) -> bool:
    """
    Check whether a file's extension is known, optionally within a category.

    Args:
        extension_map: Lowercase extension (no dot) to category list.
        file_path: File name or path to inspect.
        category: If given, the extension must be listed under it.

    Returns:
        bool: False when the file has no extension or it is not in the table.
    """
    ext = DEFAULT_PATHS.extension(file_path).lower()
    if not ext:
        return False

    categories = extension_map.get(ext)
    if not categories:
        return False
    if not category:
        return True
    return category in categories
