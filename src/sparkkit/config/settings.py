"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with SPARKKIT_ prefix
3. .env file (if SPARKKIT_ENV_FILE points at one)
4. Layered YAML config files merged through a ConfigTree:
   - Project config: .sparkkit/config.yaml (highest)
   - User config: ~/.config/sparkkit/config.yaml
   - Built-in defaults: bundled defaults/config.yaml (lowest)

Nested config uses double underscore delimiter:
  SPARKKIT_LOGGING__LEVEL=debug
  SPARKKIT_DEFAULT__PAGE=home
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import sparkkit.config.sources as sources
import sparkkit.config.types as types
import sparkkit.utils as utils

# Files and directories that mark a project root, checked bottom-up
PROJECT_MARKERS = (
    sources.PROJECT_CONFIG_DIRNAME,
    "pyproject.toml",
    "setup.py",
    "setup.cfg",
    ".git",
)


def _get_env_file() -> str | None:
    """Return SPARKKIT_ENV_FILE if it is set and exists, else None."""
    env_file = _os.environ.get("SPARKKIT_ENV_FILE")
    if env_file and _pathlib.Path(env_file).exists():
        return env_file
    return None


def find_project_root(start_path: _pathlib.Path | None = None) -> _pathlib.Path:
    """
    Find the project root directory.

    Walks up from start_path looking for any of PROJECT_MARKERS and falls
    back to the current working directory.

    Args:
        start_path: Starting path for search. Defaults to cwd.
    """
    if start_path is None:
        start_path = _pathlib.Path.cwd()

    current = start_path.resolve()
    while True:
        if any((current / marker).exists() for marker in PROJECT_MARKERS):
            return current
        if current == current.parent:
            break
        current = current.parent

    return _pathlib.Path.cwd()


class Settings(_pydantic_settings.BaseSettings):
    """
    sparkkit configuration settings.

    All settings can be overridden via environment variables with SPARKKIT_ prefix.
    For nested config, use double underscore: SPARKKIT_LOGGING__LEVEL=debug

    Config precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (SPARKKIT_*)
    3. .env file
    4. Project config (.sparkkit/config.yaml)
    5. User config (~/.config/sparkkit/config.yaml)
    6. Built-in defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="SPARKKIT_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # SPARKKIT_LOGGING__LEVEL
        extra="allow",  # Application keys live alongside the known sections
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args) (highest)
        2. env_settings (SPARKKIT_* env vars)
        3. dotenv_settings (.env file)
        4. yaml layers (config.yaml files via ConfigTree)
        5. (defaults via Field definitions) (lowest)
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.ConfigTreeSettingsSource(settings_cls, find_project_root()),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings without loading any .env file (test isolation)."""
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    version: int = _pydantic.Field(default=1, description="Config schema version")

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    default: types.DefaultRouteConfig = _pydantic.Field(
        default_factory=types.DefaultRouteConfig
    )
    """Route used when a request names no page or action."""

    @property
    def config_dir(self) -> _pathlib.Path:
        """User configuration directory (~/.config/sparkkit/)."""
        return sources.get_user_config_dir()

    @property
    def project_root(self) -> _pathlib.Path:
        """Project root directory (nearest marker or cwd)."""
        return find_project_root()

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Top-level keys that are not part of the schema (application keys)."""
        return dict(self.model_extra) if self.model_extra else {}

    def to_config_tree(self) -> utils.ConfigTree:
        """Return the effective settings, extra keys included, as a ConfigTree."""
        return utils.ConfigTree(self.model_dump(mode="json"))
