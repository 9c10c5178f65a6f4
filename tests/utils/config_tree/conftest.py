"""
Shared fixtures for ConfigTree tests.
"""

import pytest as _pytest

import sparkkit.utils.config_tree as config_tree


@_pytest.fixture
def nested_tree() -> config_tree.ConfigTree:
    """Two-level tree used by merge and copy tests."""
    return config_tree.ConfigTree(
        {
            "db": {"host": "localhost", "port": 5432},
            "debug": False,
            "plugins": ["auth", "cache"],
        }
    )


@_pytest.fixture
def locked_tree() -> config_tree.ConfigTree:
    """Tree whose merge policy is off (the default) holding one key."""
    tree = config_tree.ConfigTree(merge=False)
    tree.set("k", 1)
    return tree
