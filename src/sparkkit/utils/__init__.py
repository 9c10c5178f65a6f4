"""
Utility classes and functions for sparkkit.

General-purpose utilities that don't belong to a specific domain.
"""

import sparkkit.utils.config_tree as config_tree
from sparkkit.utils.config_tree import ConfigTree

__all__ = ["ConfigTree", "config_tree"]
