from __future__ import annotations

"""
Declarative Tree Spec Models.

Parsing and validation of nested directory specs (mapping or JSON text) and
the mirror tree returned once a spec has been materialized.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Union

from foldertree.domain.errors import InvalidSpecError

TreeSpec = Mapping[str, Any]
TreeSpecInput = Union[TreeSpec, str, bytes]

# -----------------------------------------------------------------------------
# MIRROR TREE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MirrorNode:
    """
    A materialized directory.

    Attributes:
        path: Path of the directory that was created (or already existed).
        children: Nested nodes keyed like the spec, in spec order.
    """
    path: str
    children: Dict[str, MirrorNode] = field(default_factory=dict)

    def __getitem__(self, key: str) -> MirrorNode:
        return self.children[key]

    def __contains__(self, key: object) -> bool:
        return key in self.children

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)

    def iter_paths(self) -> Iterator[str]:
        """This node's path followed by every descendant path, pre-order."""
        yield self.path
        for child in self.children.values():
            yield from child.iter_paths()

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form: {"path": ..., "<child key>": {...}, ...}."""
        out: Dict[str, Any] = {"path": self.path}
        for key, child in self.children.items():
            out[key] = child.to_dict()
        return out


MirrorTree = Dict[str, MirrorNode]


def mirror_to_dict(mirror: MirrorTree) -> Dict[str, Any]:
    """Convert a whole mirror tree into nested plain dictionaries."""
    return {key: node.to_dict() for key, node in mirror.items()}

# -----------------------------------------------------------------------------
# SPEC PARSING
# -----------------------------------------------------------------------------

def parse_tree_spec(spec: TreeSpecInput) -> TreeSpec:
    """
    Decode (if needed) and validate a declarative tree spec.

    JSON text is decoded exactly once, here. The whole structure is then
    validated so that an invalid node is reported before anything is
    created on disk.

    Args:
        spec: Nested mapping, or its UTF-8 JSON text.

    Returns:
        TreeSpec: The validated mapping.

    Raises:
        InvalidSpecError: Malformed JSON, non-object top level, empty or
                          non-string keys, or values that are neither
                          mappings nor null.
    """
    if isinstance(spec, (bytes, bytearray)):
        try:
            spec = spec.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidSpecError(f"Tree spec is not valid UTF-8: {e}") from e

    if isinstance(spec, str):
        try:
            spec = json.loads(spec)
        except json.JSONDecodeError as e:
            raise InvalidSpecError(f"Tree spec is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e

    if not isinstance(spec, Mapping):
        raise InvalidSpecError(f"Tree spec must be an object, received {type(spec).__name__}")

    _validate_node(spec, prefix="")
    return spec


def _validate_node(node: Mapping[str, Any], prefix: str) -> None:
    """Recursively check keys and values of a spec mapping."""
    for key, value in node.items():
        if not isinstance(key, str) or not key.strip():
            raise InvalidSpecError(f"Directory names must be non-empty strings, got {key!r}", prefix)

        key_path = f"{prefix}/{key}" if prefix else key
        if value is None:
            continue
        if not isinstance(value, Mapping):
            raise InvalidSpecError(
                f"Expected a nested object or null, received {type(value).__name__}", key_path
            )
        _validate_node(value, key_path)
