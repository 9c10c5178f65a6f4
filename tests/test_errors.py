"""Tests for the sparkkit exception hierarchy."""

import pathlib as _pathlib

import sparkkit.errors as errors


class TestSparkError:
    """Tests for SparkError."""

    def test_message_with_origin(self) -> None:
        """The origin is shown as a prefix."""
        err = errors.SparkError("bad value", origin="ConfigTree")

        assert str(err) == "[ConfigTree] bad value"
        assert err.origin == "ConfigTree"

    def test_message_without_origin(self) -> None:
        """Without an origin only the message is shown."""
        assert str(errors.SparkError("bad value")) == "bad value"

    def test_default_message(self) -> None:
        """An empty message falls back to the class default."""
        assert str(errors.SparkError()) == errors.SparkError.default_message


class TestSubclasses:
    """Tests for the specific error types."""

    def test_invalid_source_is_type_error(self) -> None:
        """InvalidConfigSourceError is both a SparkError and a TypeError."""
        err = errors.InvalidConfigSourceError("not a mapping", origin="ConfigTree")

        assert isinstance(err, errors.SparkError)
        assert isinstance(err, TypeError)

    def test_config_file_error(self) -> None:
        """ConfigFileError names the file."""
        path = _pathlib.Path("/etc/app.yaml")
        err = errors.ConfigFileError(path, "invalid YAML")

        assert err.path == path
        assert str(err) == "[config] Error in config file /etc/app.yaml: invalid YAML"

    def test_registry_key_error_empty(self) -> None:
        """An empty registry is reported as such."""
        err = errors.RegistryKeyError("config", [])

        assert isinstance(err, KeyError)
        assert str(err) == "[Registry] Registry label 'config' not found. Available: (empty)"

    def test_registry_key_error_message_not_quoted(self) -> None:
        """The KeyError base does not wrap the message in quotes."""
        err = errors.RegistryKeyError("db", ["config"])

        assert str(err).startswith("[Registry] Registry label")
        assert not str(err).endswith('"')
        assert err.args == ("Registry label 'db' not found. Available: config",)
