"""
Exception hierarchy for sparkkit.

Every error raised by the toolkit derives from SparkError, which records the
component that raised it. Errors that mirror a builtin category (TypeError,
KeyError) also inherit from that builtin so callers can catch either.
"""

from __future__ import annotations

import pathlib as _pathlib


class SparkError(Exception):
    """Base class for all sparkkit errors."""

    default_message = "An unknown error was reported by sparkkit"

    def __init__(self, message: str = "", origin: str | None = None) -> None:
        """
        Create the error.

        Args:
            message: Human readable description. Empty falls back to
                default_message.
            origin: Name of the component that raised the error,
                e.g. "ConfigTree" or "Registry".
        """
        self.origin = origin
        super().__init__(message or self.default_message)

    def __str__(self) -> str:
        # Exception.__str__ directly: KeyError.__str__ would quote the message
        message = Exception.__str__(self)
        if self.origin:
            return f"[{self.origin}] {message}"
        return message


class InvalidConfigSourceError(SparkError, TypeError):
    """A config source was not a mapping, or a key was not a string."""


class ConfigFileError(SparkError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}", origin="config")


class RegistryKeyError(SparkError, KeyError):
    """A required registry label was not present."""

    def __init__(self, label: str, available: list[str]) -> None:
        self.label = label
        listing = ", ".join(available) if available else "(empty)"
        super().__init__(
            f"Registry label '{label}' not found. Available: {listing}",
            origin="Registry",
        )
