"""
Configuration module for sparkkit.

Uses pydantic-settings for environment variable loading and a ConfigTree to
merge the layered YAML config files.
"""

from sparkkit.config.settings import Settings, find_project_root

__all__ = ["Settings", "find_project_root"]
