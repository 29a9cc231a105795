"""
Main CLI entry point for Rigger.

Provides the command-line interface using Click:

    rigger values values.yaml env/prod.yaml image.tag=1.2.3
    rigger get image.ref values.yaml
    rigger templates ./deploy --ext jinja2
"""

import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import rich.console as _rich_console
import rich.logging as _rich_logging
import rich.syntax as _rich_syntax
import yaml as _yaml

import rigger
import rigger.config as config
import rigger.utils.walk as walk
import rigger.values as values

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def _configure_logging(level: int) -> None:
    """Send library logs to stderr through rich."""
    handler = _rich_logging.RichHandler(
        console=_rich_console.Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    root = _logging.getLogger("rigger")
    root.handlers = [handler]
    root.setLevel(level)
    root.propagate = False


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. RIGGER_COLOR env var (1=on, 0=off)
    3. NO_COLOR env var (if set, disable color)
    4. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
        force_color is True when color was explicitly requested (not auto-detected).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)

    env_color = _os.environ.get("RIGGER_COLOR")
    if env_color is not None:
        enabled = env_color.lower() in ("1", "true", "yes", "on")
        return (enabled, enabled)

    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys.stdout.isatty(), False)


def _print_yaml(yaml_text: str, *, color: bool, force_color: bool) -> None:
    """Print YAML text, optionally with syntax highlighting."""
    if not color:
        _click.echo(yaml_text, nl=False)
        return
    console = _rich_console.Console(
        force_terminal=force_color,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    console.print(_rich_syntax.Syntax(yaml_text, "yaml", theme="monokai", background_color="default"))


def _dump(data: _typing.Any, output_format: str, *, use_color: bool | None) -> None:
    """Write a values tree in the requested format."""
    if output_format == "json":
        _click.echo(_json.dumps(data, indent=2))
        return
    color, force_color = _should_use_color(use_color)
    yaml_text = _yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    _print_yaml(yaml_text, color=color, force_color=force_color)


def _load(
    settings: config.Settings,
    sources: tuple[str, ...],
    raw: bool,
) -> dict[str, _typing.Any]:
    """Load values, converting engine errors into a click error."""
    try:
        if raw:
            return values.load_values(sources)
        return values.load_and_resolve(sources, resolver=settings.build_resolver())
    except values.ValuesError as e:
        raise _click.ClickException(str(e)) from e


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(rigger.__version__, "-V", "--version", prog_name="rigger")
@_click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """Rigger - values loading and template resolution for app deployments."""
    try:
        settings = config.Settings()
    except ValueError as e:
        raise _click.ClickException(f"Invalid settings: {e}") from e

    _configure_logging(_logging.DEBUG if verbose else settings.log_level_number)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command(name="values")
@_click.argument("sources", nargs=-1, required=True)
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option("--raw", is_flag=True, help="Merge only, do not resolve references")
@_click.option("--color/--no-color", "use_color", default=None, help="Force or disable syntax highlighting")
@_click.pass_context
def values_cmd(
    ctx: _click.Context,
    sources: tuple[str, ...],
    as_json: bool,
    raw: bool,
    use_color: bool | None,
) -> None:
    """Load, merge and resolve values.

    SOURCES are YAML/JSON files or key.path=literal overrides; later ones win.

    Examples:
        rigger values values.yaml                      # Resolved YAML
        rigger values values.yaml image.tag=1.2.3      # With an override
        rigger values values.yaml --raw                # Merged, unresolved
        rigger values values.yaml --json               # As JSON
    """
    settings: config.Settings = ctx.obj["settings"]
    data = _load(settings, sources, raw)
    output_format = "json" if as_json else settings.output_format
    _dump(data, output_format, use_color=use_color)


@cli.command(name="get")
@_click.argument("path")
@_click.argument("sources", nargs=-1, required=True)
@_click.option("--json", "as_json", is_flag=True, help="Output containers as JSON")
@_click.pass_context
def get_cmd(
    ctx: _click.Context,
    path: str,
    sources: tuple[str, ...],
    as_json: bool,
) -> None:
    """Print a single resolved value at PATH (e.g. services.web.image)."""
    settings: config.Settings = ctx.obj["settings"]
    data = _load(settings, sources, raw=False)

    try:
        found = values.has_value(data, path)
    except values.PathError as e:
        raise _click.ClickException(str(e)) from e
    if not found:
        raise _click.ClickException(f"No value at path: {path}")

    value = values.get_value(data, path)
    if isinstance(value, (dict, list)):
        output_format = "json" if as_json else settings.output_format
        _dump(value, output_format, use_color=False)
    elif value is None:
        _click.echo("null")
    elif isinstance(value, bool):
        _click.echo("true" if value else "false")
    else:
        _click.echo(str(value))


@cli.command(name="templates")
@_click.argument(
    "root",
    type=_click.Path(exists=True, file_okay=False, path_type=_pathlib.Path),
)
@_click.option("--ext", "extension", default=None, help="File extension to match (default from settings)")
@_click.option("--name", default=None, help="Match an exact file name instead of an extension")
@_click.pass_context
def templates_cmd(
    ctx: _click.Context,
    root: _pathlib.Path,
    extension: str | None,
    name: str | None,
) -> None:
    """List template files found under ROOT."""
    settings: config.Settings = ctx.obj["settings"]
    if name:
        files = walk.get_files_with_name(root, name)
    else:
        files = walk.get_files_with_extension(root, extension or settings.template_extension)
    for file in files:
        _click.echo(file)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="rigger")


if __name__ == "__main__":
    main()
