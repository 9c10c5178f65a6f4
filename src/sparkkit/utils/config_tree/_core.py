"""
ConfigTree: a recursive, ordered configuration container.

A ConfigTree maps string keys to either leaf values or nested ConfigTrees.
Nested mappings are always wrapped into child trees on the way in, so every
level supports the same get/set/iterate API, and to_dict() unwraps them
again on the way out.

Overwrite policy:
- set() with merge=None or merge=True replaces an existing value
- set() with merge=False keeps the existing value unless the node's
  merge_by_default flag is on
- Missing keys are always inserted
- merge_from() deep-merges regardless of any node's flag

Thread safety: NOT thread-safe. Share to_dict() snapshots, or guard the
tree with an external lock.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import sparkkit.errors as errors
import sparkkit.utils.config_tree._merge as _merge
import sparkkit.utils.config_tree._types as _types

_logger = _logging.getLogger(__name__)


class ConfigTree(_abc.Mapping[str, _typing.Any]):
    """
    Recursive key/value configuration container.

    Example:
        >>> tree = ConfigTree({"db": {"host": "localhost", "port": 5432}})
        >>> tree.get("db").get("port")
        5432
        >>> tree.merge_from({"db": {"port": 6432}}).to_dict()
        {'db': {'host': 'localhost', 'port': 6432}}

    Args:
        initial: Mapping or ConfigTree to populate from. ConfigTree sources
            are copied level by level, never aliased.
        merge: Overwrite directive passed to every set() during population
            (see set()). It does not change merge_by_default.
    """

    def __init__(
        self,
        initial: _abc.Mapping[str, _typing.Any] | None = None,
        merge: bool | None = None,
    ) -> None:
        self._entries: dict[str, _types.Scalar | _types.Subtree] = {}
        self._merge_by_default = False
        if initial is not None:
            self.set_many(initial, merge)

    @classmethod
    def from_yaml_file(
        cls,
        path: _pathlib.Path | str,
        merge: bool | None = None,
    ) -> ConfigTree:
        """
        Build a tree from a YAML file whose top level is a mapping.

        Raises:
            ConfigFileError: If the file is unreadable, malformed, or not a
                mapping at the top level.
        """
        import sparkkit.utils.config_tree._yaml as _yaml

        return cls(_yaml.load_yaml_file(_pathlib.Path(path)), merge)

    @property
    def merge_by_default(self) -> bool:
        """Whether set(..., merge=False) still overwrites on this node."""
        return self._merge_by_default

    def set_merge_policy(self, on: bool) -> None:
        """
        Set merge_by_default for this node only.

        Existing subtrees keep their own flag.
        """
        self._merge_by_default = bool(on)

    # =========================================================================
    # Writes
    # =========================================================================

    def set(self, key: str, value: _typing.Any, merge: bool | None = None) -> None:
        """
        Set a single entry.

        Mappings (and ConfigTrees) are stored as a fresh child tree built
        with the same merge directive; anything else is stored as a leaf.

        Args:
            key: Entry name.
            value: Leaf value or nested mapping.
            merge: True or None overwrite an existing entry. False overwrites
                only when merge_by_default is on. Missing keys are always
                inserted.

        Raises:
            InvalidConfigSourceError: If key is not a string.
        """
        if not isinstance(key, str):
            raise errors.InvalidConfigSourceError(
                f"Config keys must be strings, got {type(key).__name__}",
                origin="ConfigTree",
            )

        if key in self._entries and merge is False and not self._merge_by_default:
            _logger.debug("Keeping existing value for %r (merge disabled)", key)
            return

        self._entries[key] = self._wrap(value, merge)

    def set_many(
        self,
        source: _abc.Mapping[str, _typing.Any],
        merge: bool | None = None,
    ) -> None:
        """
        Call set() for every entry of source, in source order.

        Args:
            source: Plain mapping or ConfigTree.
            merge: Overwrite directive applied to each set().

        Raises:
            InvalidConfigSourceError: If source is not a mapping.
        """
        if not isinstance(source, _abc.Mapping):
            raise errors.InvalidConfigSourceError(
                f"Config source must be a mapping, got {type(source).__name__}",
                origin="ConfigTree",
            )

        # Snapshot first so a tree can be re-set from itself
        for key, value in list(source.items()):
            self.set(key, value, merge)

    def append(
        self,
        source: _abc.Mapping[str, _typing.Any],
        merge: bool | None = None,
    ) -> ConfigTree:
        """Chaining form of set_many()."""
        self.set_many(source, merge)
        return self

    def merge_from(self, source: _abc.Mapping[str, _typing.Any]) -> ConfigTree:
        """
        Deep-merge source into this tree.

        Both sides are flattened to plain dicts, merged with deep_merge(),
        and a new set of entries is built from the result with merge=True.
        Nested mappings merge key by key; a leaf on either side replaces the
        other side's value at that key. Keys missing from source are
        preserved. The entries are swapped in only once the whole result is
        built, so a failed merge leaves this tree unchanged.

        Rebuilt subtrees are fresh nodes, so their merge_by_default is off;
        this node keeps its own flag.

        Args:
            source: Plain mapping or ConfigTree.

        Returns:
            This tree, for chaining.

        Raises:
            InvalidConfigSourceError: If source is not a mapping or holds a
                non-string key at any depth.
        """
        if not isinstance(source, _abc.Mapping):
            raise errors.InvalidConfigSourceError(
                f"Merge source must be a mapping, got {type(source).__name__}",
                origin="ConfigTree",
            )

        merged = _merge.deep_merge(self.to_dict(), _merge.to_plain(source))
        rebuilt = ConfigTree(merged, merge=True)
        self._entries = rebuilt._entries
        _logger.debug("Merged %d top-level keys into tree", len(source))
        return self

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, key: str, default: _typing.Any = None) -> _typing.Any:
        """
        Get an entry's value.

        Leaves are returned as stored; nested entries are returned as the
        child ConfigTree itself (writes to it are visible in this tree).

        Keys are always strings, so any other key (hashable or not) is
        simply absent.

        Returns:
            The value, or default if key is not present.
        """
        if not isinstance(key, str):
            return default
        entry = self._entries.get(key)
        if entry is None:
            return default
        return _types.unwrap(entry)

    def has(self, key: str) -> bool:
        """Check whether key is present (also for entries holding None)."""
        return isinstance(key, str) and key in self._entries

    def count(self) -> int:
        """Number of top-level entries."""
        return len(self._entries)

    def to_dict(self) -> dict[str, _typing.Any]:
        """
        Return the tree as plain nested dicts.

        Every level is a new dict and leaf containers are deep-copied, so
        the result can be mutated or serialized without touching the tree.
        """
        result: dict[str, _typing.Any] = {}
        for key, entry in self._entries.items():
            if isinstance(entry, _types.Subtree):
                result[key] = entry.tree.to_dict()
            else:
                result[key] = _copy.deepcopy(entry.value)
        return result

    def copy(self) -> ConfigTree:
        """Return an independent copy, keeping this node's merge policy."""
        new = ConfigTree(self)
        new.set_merge_policy(self._merge_by_default)
        return new

    # =========================================================================
    # Mapping protocol
    # =========================================================================

    def __getitem__(self, key: str) -> _typing.Any:
        """
        Get an entry's value.

        Raises:
            KeyError: If key is not present. Use get() for a default.
        """
        return _types.unwrap(self._entries[key])

    def __iter__(self) -> _typing.Iterator[str]:
        """Iterate over keys in insertion order. Each call is independent."""
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        """Compare flattened content with another tree or plain mapping."""
        if isinstance(other, _abc.Mapping):
            return bool(self.to_dict() == _merge.to_plain(other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ConfigTree({self.to_dict()!r})"

    def _wrap(
        self,
        value: _typing.Any,
        merge: bool | None,
    ) -> _types.Scalar | _types.Subtree:
        """Wrap a raw value into its entry variant."""
        if isinstance(value, _abc.Mapping):
            return _types.Subtree(ConfigTree(value, merge))
        return _types.Scalar(_copy.deepcopy(value))
