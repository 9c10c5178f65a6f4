"""
Shared pytest fixtures for sparkkit tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import sparkkit.config as config
import sparkkit.config.sources as sources
import sparkkit.registry as registry


@_pytest.fixture(autouse=True)
def isolated_project(
    tmp_path: _pathlib.Path,
    monkeypatch: _pytest.MonkeyPatch,
) -> _typing.Iterator[_pathlib.Path]:
    """
    Run every test inside an empty project with no user config.

    - Clears SPARKKIT_* environment variables
    - Points SPARKKIT_CONFIG_DIR at a temporary (initially missing) directory
    - Changes into a temporary project root marked by pyproject.toml
    - Starts and ends with an empty process registry

    Yields:
        The project root directory.
    """
    for key in list(_os.environ):
        if key.startswith("SPARKKIT_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv(sources.ENV_CONFIG_DIR, str(tmp_path / "user-config"))

    project = tmp_path / "project"
    project.mkdir()
    (project / "pyproject.toml").write_text('[project]\nname = "demo"\nversion = "0.1.0"\n')
    monkeypatch.chdir(project)

    registry.reset_registry()
    yield project
    registry.reset_registry()


@_pytest.fixture
def user_config_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """The user config directory set up by isolated_project, created on demand."""
    path = tmp_path / "user-config"
    path.mkdir(exist_ok=True)
    return path


@_pytest.fixture
def write_yaml() -> _typing.Callable[[_pathlib.Path, str], _pathlib.Path]:
    """
    Helper that writes YAML text to a path, creating parent directories.

    Usage:
        def test_something(write_yaml, tmp_path):
            path = write_yaml(tmp_path / "a.yaml", "key: value\\n")
    """

    def _write(path: _pathlib.Path, content: str) -> _pathlib.Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@_pytest.fixture
def clean_settings() -> config.Settings:
    """Settings built from built-in defaults only."""
    return config.Settings.construct_without_dotenv()
