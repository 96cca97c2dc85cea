from __future__ import annotations

"""
Directory Tree Materializer.

Creates the directories described by a declarative nested spec and returns
a mirror tree carrying the path created for every key. Creation is
idempotent (existing directories are fine) and fail-fast: the first
directory that cannot be created aborts the call, leaving earlier
creations in place.
"""

import logging
from typing import Any, Mapping, Optional

from foldertree.domain.errors import DirectoryCreationError
from foldertree.domain.ports import FilesystemGateway, PathUtility
from foldertree.domain.tree_spec import MirrorNode, MirrorTree, TreeSpecInput, parse_tree_spec
from foldertree.infra.fs import DEFAULT_FILESYSTEM
from foldertree.infra.paths import DEFAULT_PATHS

logger = logging.getLogger(__name__)


# ==============================================================================
# MATERIALIZER SERVICE
# ==============================================================================

class TreeMaterializer:
    """
    Declarative-spec-to-directories builder.

    Args:
        fs: Filesystem gateway. Defaults to the local disk.
        paths: Path utility. Defaults to slash-normalizing helpers.
    """

    def __init__(
            self,
            fs: Optional[FilesystemGateway] = None,
            paths: Optional[PathUtility] = None,
    ):
        self.fs = fs if fs is not None else DEFAULT_FILESYSTEM
        self.paths = paths if paths is not None else DEFAULT_PATHS

    def create_tree(self, spec: TreeSpecInput, root_path: str, dry_run: bool = False) -> MirrorTree:
        """
        Materialize a directory spec under root_path.

        Args:
            spec: Nested mapping of directory names, or its JSON text.
                  Empty mappings (or null) are leaf directories.
            root_path: Base directory the spec is created under. A relative
                       root is resolved against the working directory, so
                       every mirror path is absolute.
            dry_run: Compute the mirror tree without touching the disk.

        Returns:
            MirrorTree: Same keys as spec, each node carrying its path.

        Raises:
            InvalidSpecError: The spec cannot be decoded or validated.
            DirectoryCreationError: A directory could not be created.
        """
        tree = parse_tree_spec(spec)
        root = self.paths.absolute(root_path)
        logger.info(f"Materializing {len(tree)} top-level entries under: {root}{' (dry run)' if dry_run else ''}")

        mirror = self._build(tree, root, "", dry_run)

        logger.debug(f"Materialization finished under: {root}")
        return mirror

    # -------------------------------------------------------------------------
    # RECURSION
    # -------------------------------------------------------------------------

    def _build(self, node: Mapping[str, Any], current: str, key_prefix: str, dry_run: bool) -> MirrorTree:
        """Create every key of node under current; returns a fresh subtree."""
        out: MirrorTree = {}
        for key, value in node.items():
            key_path = f"{key_prefix}/{key}" if key_prefix else key
            child_path = self.paths.join(current, key)

            if not dry_run:
                self._create(key_path, child_path)

            children: MirrorTree = {}
            if value:
                children = self._build(value, child_path, key_path, dry_run)
            out[key] = MirrorNode(path=child_path, children=children)
        return out

    def _create(self, key_path: str, path: str) -> None:
        try:
            created = self.fs.create_directory(path, recursive=True)
        except OSError as e:
            logger.error(f"Directory creation failed for '{key_path}' at '{path}': {e}")
            raise DirectoryCreationError(key_path, path, str(e)) from e

        if not created:
            logger.error(f"Directory creation refused for '{key_path}' at '{path}'")
            raise DirectoryCreationError(key_path, path, "gateway reported failure")
        logger.debug(f"Ensured directory: {path}")


# ==============================================================================
# PUBLIC API
# ==============================================================================

def create_folder_tree(spec: TreeSpecInput, root_path: str, dry_run: bool = False) -> MirrorTree:
    """
    Materialize a directory spec on the local disk.

    Args:
        spec: Nested mapping of directory names, or its JSON text.
        root_path: Base directory.
        dry_run: Compute the mirror tree only.

    Returns:
        MirrorTree: Created paths keyed like the spec.
    """
    return TreeMaterializer().create_tree(spec, root_path, dry_run=dry_run)
