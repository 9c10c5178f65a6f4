"""Layered YAML settings source for sparkkit.

The YAML side of the settings stack is a list of ConfigLayer files, lowest
precedence first:

1. built-in: the bundled defaults/config.yaml (required)
2. user: ~/.config/sparkkit/config.yaml, or $SPARKKIT_CONFIG_DIR/config.yaml
3. project: .sparkkit/config.yaml under the project root

ConfigTreeSettingsSource folds the existing layers into one ConfigTree with
merge_from(), so nested mappings merge key by key and any other value in a
higher layer replaces the lower one. Environment variables and constructor
arguments sit above all of this (handled by pydantic-settings).
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings

import sparkkit.errors as errors
import sparkkit.utils as utils

_logger = _logging.getLogger(__name__)

# Environment variable for overriding user config directory
ENV_CONFIG_DIR = "SPARKKIT_CONFIG_DIR"

# Directory holding project-level config, relative to the project root
PROJECT_CONFIG_DIRNAME = ".sparkkit"


class ConfigLayer(_typing.NamedTuple):
    """One YAML file in the settings stack."""

    name: str
    path: _pathlib.Path
    required: bool = False


def get_layers(
    project_root: _pathlib.Path | None = None,
    *,
    user_config_path: _pathlib.Path | None = None,
    builtin_config_path: _pathlib.Path | None = None,
) -> list[ConfigLayer]:
    """
    List the YAML layers, lowest precedence first.

    Args:
        project_root: Project whose .sparkkit/config.yaml is the top layer.
            None leaves the project layer out.
        user_config_path: Replaces the user config path (tests).
        builtin_config_path: Replaces the bundled defaults path (tests).
    """
    layers = [
        ConfigLayer("built-in", builtin_config_path or get_builtin_defaults_path(), True),
        ConfigLayer("user", user_config_path or get_user_config_path()),
    ]
    if project_root is not None:
        layers.append(ConfigLayer("project", get_project_config_path(project_root)))
    return layers


def _read_layer(layer: ConfigLayer) -> dict[str, _typing.Any]:
    """
    Load one layer. Missing optional layers read as empty.

    Raises:
        ConfigFileError: If a required layer is missing or empty, or any
            layer is malformed.
    """
    if not layer.path.exists():
        if layer.required:
            raise errors.ConfigFileError(
                layer.path,
                f"required {layer.name} config not found (possible installation problem)",
            )
        return {}

    content = utils.config_tree.load_yaml_file(layer.path)
    if not content and layer.required:
        raise errors.ConfigFileError(
            layer.path,
            f"required {layer.name} config is empty (possible installation problem)",
        )
    return content


class ConfigTreeSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    pydantic-settings source returning the merged YAML layers.

    The layers are read once, at construction. Pydantic validates the
    merged result together with the other sources.
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        project_root: _pathlib.Path | None = None,
        *,
        user_config_path: _pathlib.Path | None = None,
        builtin_config_path: _pathlib.Path | None = None,
    ) -> None:
        super().__init__(settings_cls)
        self._tree = utils.ConfigTree()
        self._loaded: list[ConfigLayer] = []

        for layer in get_layers(
            project_root,
            user_config_path=user_config_path,
            builtin_config_path=builtin_config_path,
        ):
            content = _read_layer(layer)
            if not content:
                continue
            try:
                self._tree.merge_from(content)
            except errors.InvalidConfigSourceError as e:
                raise errors.ConfigFileError(layer.path, str(e)) from e
            self._loaded.append(layer)
            _logger.debug("Loaded %s config layer from %s", layer.name, layer.path)

    @property
    def tree(self) -> utils.ConfigTree:
        """The merged ConfigTree of all loaded YAML layers."""
        return self._tree

    @property
    def loaded_layers(self) -> list[ConfigLayer]:
        """Layers that contributed values, highest precedence first."""
        return self._loaded[::-1]

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        """
        Get value for a field from the merged tree.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._tree.get(field_name)
        if isinstance(value, utils.ConfigTree):
            value = value.to_dict()
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Merged config as a plain dict; unknown keys are kept for extra="allow"."""
        return self._tree.to_dict()


def get_builtin_defaults_path() -> _pathlib.Path:
    """Path to the bundled defaults/config.yaml."""
    return _pathlib.Path(__file__).parent / "defaults" / "config.yaml"


def get_user_config_dir() -> _pathlib.Path:
    """User config directory: $SPARKKIT_CONFIG_DIR, else ~/.config/sparkkit."""
    config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env)
    return _pathlib.Path.home() / ".config" / "sparkkit"


def get_user_config_path() -> _pathlib.Path:
    return get_user_config_dir() / "config.yaml"


def get_project_config_path(project_root: _pathlib.Path) -> _pathlib.Path:
    return project_root / PROJECT_CONFIG_DIRNAME / "config.yaml"
