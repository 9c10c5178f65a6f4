"""
Process-wide registry for shared objects.

The registry is a plain label → value store. The first write to a label
wins; later set() calls are ignored until the label is removed or reset().
Applications typically register their ConfigTree under CONFIG_LABEL at
startup and look it up from anywhere afterwards.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import sparkkit.errors as errors

if _typing.TYPE_CHECKING:
    import sparkkit.utils.config_tree as config_tree

_logger = _logging.getLogger(__name__)

CONFIG_LABEL = "config"
"""Label under which the application ConfigTree is registered."""


class Registry:
    """
    Label → value store.

    Labels may hold None; use has() rather than get() to test presence.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _typing.Any] = {}

    def set(self, label: str, value: _typing.Any) -> None:
        """
        Register a value if the label is not taken yet.

        Args:
            label: Registry label
            value: Value to store
        """
        if label in self._entries:
            _logger.debug("Registry label %r already set, ignoring write", label)
            return
        self._entries[label] = value

    def get(self, label: str, default: _typing.Any = None) -> _typing.Any:
        """
        Get a registered value.

        Returns:
            The value, or default if the label is not registered
        """
        return self._entries.get(label, default)

    def require(self, label: str) -> _typing.Any:
        """
        Get a registered value, raising if absent.

        Raises:
            RegistryKeyError: If the label is not registered
        """
        if label not in self._entries:
            raise errors.RegistryKeyError(label, self.labels())
        return self._entries[label]

    def has(self, label: str) -> bool:
        return label in self._entries

    def remove(self, label: str) -> None:
        """Remove a label. Unknown labels are ignored."""
        self._entries.pop(label, None)

    def reset(self, label: str, value: _typing.Any) -> None:
        """Replace a label's value, registering it if absent."""
        self.remove(label)
        self.set(label, value)

    def labels(self) -> list[str]:
        """Registered labels, sorted."""
        return sorted(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, label: object) -> bool:
        return label in self._entries


# Global default registry
_default_registry: Registry | None = None


def get_registry() -> Registry:
    """
    Get the process-wide registry.

    The registry is created lazily on first use.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = Registry()
    return _default_registry


def reset_registry() -> None:
    """Drop the process-wide registry so the next lookup starts empty."""
    global _default_registry
    _default_registry = None


def get_config_tree() -> config_tree.ConfigTree:
    """
    Get the application ConfigTree from the process-wide registry.

    An empty tree is registered under CONFIG_LABEL if none exists.
    """
    import sparkkit.utils.config_tree as config_tree

    registry = get_registry()
    if not registry.has(CONFIG_LABEL):
        registry.set(CONFIG_LABEL, config_tree.ConfigTree())
    tree: config_tree.ConfigTree = registry.get(CONFIG_LABEL)
    return tree
