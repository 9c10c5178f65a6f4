"""
Deep merge of plain nested mappings.

ConfigTree.merge_from() flattens both sides to plain dicts, merges them here
and rebuilds itself from the result. Keeping the merge on plain data makes
the outcome independent of any node's merge policy.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import typing as _typing


def deep_merge(base: _typing.Any, incoming: _typing.Any) -> _typing.Any:
    """
    Merge incoming into base, recursing into nested mappings.

    Rules:
    - If incoming is not a mapping, it replaces base entirely
    - Keys absent from base are inserted
    - Keys whose base value is a mapping are merged recursively
    - Any other base value is replaced
    - Keys only present in base are kept unchanged

    Neither argument is modified; the result shares no containers with
    incoming.

    Args:
        base: The mapping being merged into.
        incoming: The mapping (or leaf value) taking priority.

    Returns:
        The merged value.

    Example:
        >>> deep_merge({"a": {"x": 1, "y": 2}, "b": 3}, {"a": {"y": 5}})
        {'a': {'x': 1, 'y': 5}, 'b': 3}
    """
    if not isinstance(incoming, _abc.Mapping):
        return _copy.deepcopy(incoming)

    if isinstance(base, _abc.Mapping):
        result = dict(base)
    else:
        # Mapping over a leaf: nothing of the leaf survives
        result = {}

    for key, value in incoming.items():
        if key in result and isinstance(result[key], _abc.Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = _copy.deepcopy(value)
    return result


def to_plain(value: _typing.Any) -> _typing.Any:
    """
    Convert a mapping (including nested ConfigTrees) into plain dicts.

    Anything exposing to_dict() is flattened through it; other mappings are
    rebuilt key by key; leaves are deep-copied.
    """
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, _abc.Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    return _copy.deepcopy(value)
