"""Root CLI group for licensectl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from licensectl import __version__
from licensectl.commands import register_commands
from licensectl.commands._base import LicenseGroup
from licensectl.commands._context import AppContext
from licensectl.config.settings import LicenseSettings


@click.group(cls=LicenseGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="licensectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-C",
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Working directory for relative paths (default: config location or CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    root: Path | None,
) -> None:
    """licensectl — assemble third-party license manifests."""
    ctx.ensure_object(dict)
    try:
        settings = LicenseSettings.from_cli(
            config_path=config_path,
            root=root,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
