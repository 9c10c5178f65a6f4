"""
YAML adapters for ConfigTree.

The tree itself knows no file formats. These helpers turn YAML documents
into plain mappings (via PyYAML's SafeLoader) and dump trees back out.
"""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import sparkkit.errors as errors
import sparkkit.utils.config_tree._merge as _merge

# Stand-in path for errors raised on in-memory documents
_STRING_SOURCE = _pathlib.Path("<string>")


def load_yaml(
    stream: _typing.Any,
    *,
    path: _pathlib.Path | None = None,
) -> dict[str, _typing.Any]:
    """
    Parse a YAML document whose top level is a mapping.

    Args:
        stream: YAML content (string, bytes, or file-like object).
        path: File the content came from, used in error messages.

    Returns:
        The parsed mapping. An empty document yields an empty dict.

    Raises:
        ConfigFileError: If the YAML is malformed or its top level is not
            a mapping.
    """
    source = path if path is not None else _STRING_SOURCE
    try:
        parsed = _yaml.safe_load(stream)
    except _yaml.YAMLError as e:
        raise errors.ConfigFileError(source, f"invalid YAML: {e}") from e

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise errors.ConfigFileError(
            source,
            f"config must be a YAML mapping (dict), got {type_name}",
        )

    return parsed


def load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any]:
    """
    Read and parse a YAML config file.

    Raises:
        ConfigFileError: If the file cannot be read or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise errors.ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise errors.ConfigFileError(path, f"cannot read file: {e}") from e

    return load_yaml(content, path=path)


def dump_yaml(source: _typing.Any) -> str:
    """Serialize a ConfigTree or mapping to block-style YAML, keeping key order."""
    return str(
        _yaml.safe_dump(
            _merge.to_plain(source),
            default_flow_style=False,
            sort_keys=False,
        )
    )
