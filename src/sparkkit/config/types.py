"""Configuration section types for sparkkit settings.

Each section maps to one top-level key of the YAML config files:
- LoggingConfig: logging.*
- DefaultRouteConfig: default.*

All sections use `extra="allow"` so keys unknown to the schema survive
validation and still show up in `sparkkit config show`.
"""

import typing as _typing

import pydantic as _pydantic


class ConfigBase(_pydantic.BaseModel):
    """Base class for all config sections."""

    model_config = _pydantic.ConfigDict(extra="allow")


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "warning"
    """Root log level applied by the CLI."""

    format: str = "%(levelname)s %(name)s: %(message)s"
    """Log record format (logging.Formatter %-style)."""


class DefaultRouteConfig(ConfigBase):
    """
    Route used when a request names no page or action.

    YAML section: default.*
    """

    page: str = _pydantic.Field(default="index", min_length=1)
    """Default page."""

    action: str = _pydantic.Field(default="index", min_length=1)
    """Default action."""
