"""
Main CLI entry point for sparkkit.

Provides the command-line interface using Click:
- config: show the effective settings and where they come from
- config merge: deep-merge arbitrary YAML files through a ConfigTree
"""

import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.console as _rich_console
import rich.syntax as _rich_syntax

import sparkkit
import sparkkit.config as config
import sparkkit.config.sources as config_sources
import sparkkit.errors as errors
import sparkkit.registry as registry
import sparkkit.timer as timer
import sparkkit.utils.config_tree as config_tree

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def _configure_logging(settings: config.Settings, verbose: bool) -> None:
    """Apply the configured log level and format to the root logger."""
    level = "DEBUG" if verbose else settings.logging.level.upper()
    _logging.basicConfig(level=level, format=settings.logging.format)


@_click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@_click.version_option(sparkkit.__version__, "-v", "--version", prog_name="sparkkit")
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """sparkkit - layered configuration trees, registry and timers.

    \b
    Examples:
        sparkkit config                      # Show configuration overview
        sparkkit config show --json          # Effective settings as JSON
        sparkkit config merge a.yaml b.yaml  # Deep-merge YAML files
    """
    try:
        settings = config.Settings()
    except errors.SparkError as e:
        raise _click.ClickException(str(e)) from e
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid configuration:\n{e}") from e

    _configure_logging(settings, verbose)

    # Make the effective config reachable through the process registry
    registry.get_registry().reset(registry.CONFIG_LABEL, settings.to_config_tree())

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings

    if ctx.invoked_subcommand is None:
        _click.echo(ctx.get_help())


# =============================================================================
# Config Commands
# =============================================================================


@cli.group(invoke_without_command=True)
@_click.pass_context
def config_cmd(ctx: _click.Context) -> None:
    """Configuration management commands.

    Without a subcommand, shows configuration overview.
    """
    if ctx.invoked_subcommand is None:
        settings: config.Settings = ctx.obj["settings"]
        tree = registry.get_config_tree()
        route = tree.get("default", config_tree.ConfigTree())
        _click.echo("sparkkit Configuration:")
        _click.echo(f"  Log Level: {settings.logging.level}")
        _click.echo(f"  Default Route: {route.get('page')}/{route.get('action')}")
        _click.echo(f"  Project Root: {settings.project_root}")
        _click.echo(f"  Config Dir: {settings.config_dir}")
        _click.echo("\nRun 'sparkkit config show' for full configuration details.")


# Register config_cmd with the name "config" to avoid shadowing the module
cli.add_command(config_cmd, name="config")


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option("--section", type=str, default=None, help="Show specific section only")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
def config_show(as_json: bool, section: str | None, use_color: bool | None) -> None:
    """Show effective configuration from all sources.

    Displays the merged configuration from built-in defaults, user config,
    project config and SPARKKIT_* environment variables.

    Examples:
        sparkkit config show                  # Show all config as YAML
        sparkkit config show --json           # Show as JSON
        sparkkit config show --section default
    """
    tree = registry.get_config_tree()

    if section:
        if not tree.has(section):
            raise _click.ClickException(f"Unknown section: {section}")
        tree = config_tree.ConfigTree({section: tree.get(section)})

    _emit(tree, as_json=as_json, use_color=use_color)


@config_cmd.command(name="path")
@_click.option("--all", "show_all", is_flag=True, help="Show all paths even if not found")
def config_path(show_all: bool) -> None:
    """Show configuration file paths and their status.

    Examples:
        sparkkit config path        # Show existing config files
        sparkkit config path --all  # Show all possible paths
    """
    # Highest precedence first
    for layer in reversed(config_sources.get_layers(config.find_project_root())):
        exists = layer.path.exists()
        if exists or show_all:
            status = "✓" if exists else "✗"
            _click.echo(f"{status} {layer.name}: {layer.path}")


@config_cmd.command(name="merge")
@_click.argument(
    "files",
    nargs=-1,
    required=True,
    type=_click.Path(dir_okay=False, path_type=_pathlib.Path),
)
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option("--timings", is_flag=True, help="Report per-file load times on stderr")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
def config_merge(
    files: tuple[_pathlib.Path, ...],
    as_json: bool,
    timings: bool,
    use_color: bool | None,
) -> None:
    """Deep-merge YAML files, later files taking precedence.

    Nested mappings are merged key by key; any other value in a later
    file replaces the earlier one.

    Examples:
        sparkkit config merge base.yaml prod.yaml
        sparkkit config merge base.yaml local.yaml --json
    """
    clock = timer.Timer()
    tree = config_tree.ConfigTree()

    for path in files:
        try:
            with clock.measure(str(path)):
                tree.merge_from(config_tree.load_yaml_file(path))
        except errors.ConfigFileError as e:
            raise _click.ClickException(str(e)) from e
        except errors.SparkError as e:
            raise _click.ClickException(f"Cannot merge {path}: {e}") from e

    _emit(tree, as_json=as_json, use_color=use_color)

    if timings:
        _click.echo(clock.format_totals(), err=True)


# =============================================================================
# Output helpers
# =============================================================================


def _emit(
    tree: config_tree.ConfigTree,
    *,
    as_json: bool,
    use_color: bool | None,
) -> None:
    """Print a tree as JSON, or as (optionally highlighted) YAML."""
    if as_json:
        _click.echo(_json.dumps(tree.to_dict(), indent=2))
        return

    color_enabled, force_color = _should_use_color(use_color)
    _print_yaml(config_tree.dump_yaml(tree), color=color_enabled, force_color=force_color)


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. NO_COLOR env var (if set, disable color) - standard convention
    3. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
        force_color is True when color was explicitly requested (not auto-detected).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)

    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys.stdout.isatty(), False)


def _print_yaml(yaml_text: str, *, color: bool = True, force_color: bool = False) -> None:
    """Print YAML text, optionally with syntax highlighting.

    Args:
        yaml_text: The YAML text to print
        color: Whether to use syntax highlighting
        force_color: Force color even when not a TTY (for piping with --color)
    """
    if not color:
        _click.echo(yaml_text)
        return

    console = _rich_console.Console(
        force_terminal=force_color,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    syntax = _rich_syntax.Syntax(
        yaml_text,
        "yaml",
        theme="monokai",
        background_color="default",
    )
    console.print(syntax)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="sparkkit")


if __name__ == "__main__":
    main()
