"""
ConfigTree: a recursive configuration container with deep merging.

Nested mappings are stored as child trees, so every level supports the same
get/set/iterate API. Whole documents are combined with merge_from(), which
deep-merges nested mappings and lets leaves replace.

Example:
    >>> from sparkkit.utils.config_tree import ConfigTree
    >>> tree = ConfigTree({"a": {"x": 1, "y": 2}, "b": 3})
    >>> tree.merge_from({"a": {"y": 5}}).to_dict()
    {'a': {'x': 1, 'y': 5}, 'b': 3}
"""

from sparkkit.utils.config_tree._core import ConfigTree
from sparkkit.utils.config_tree._merge import deep_merge, to_plain
from sparkkit.utils.config_tree._types import ConfigValue, Primitive, Scalar, Subtree
from sparkkit.utils.config_tree._yaml import dump_yaml, load_yaml, load_yaml_file

__all__ = [
    "ConfigTree",
    "ConfigValue",
    "Primitive",
    "Scalar",
    "Subtree",
    "deep_merge",
    "dump_yaml",
    "load_yaml",
    "load_yaml_file",
    "to_plain",
]
