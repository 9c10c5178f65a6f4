"""
CLI module for sparkkit.

Provides the command-line interface using Click.
"""

from sparkkit.cli.main import cli, main

__all__ = ["main", "cli"]
