"""
Value types stored inside a ConfigTree.

Each entry of a tree holds one of two variants:
- Scalar: a leaf value (str, int, float, bool, None, or an opaque
  non-mapping container such as a list)
- Subtree: a nested ConfigTree owned exclusively by its parent
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

if _typing.TYPE_CHECKING:
    import sparkkit.utils.config_tree._core as _core

# Leaf values as they come out of YAML/JSON documents
Primitive: _typing.TypeAlias = "str | int | float | bool | None"


@_dataclasses.dataclass(frozen=True, slots=True)
class Scalar:
    """Leaf entry."""

    value: _typing.Any


@_dataclasses.dataclass(frozen=True, slots=True)
class Subtree:
    """Nested tree entry."""

    tree: _core.ConfigTree


ConfigValue: _typing.TypeAlias = "Scalar | Subtree"


def unwrap(entry: Scalar | Subtree) -> _typing.Any:
    """Return the primitive of a Scalar, or the ConfigTree of a Subtree."""
    if isinstance(entry, Subtree):
        return entry.tree
    return entry.value
