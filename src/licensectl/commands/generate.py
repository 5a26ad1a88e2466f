"""Command: build the license manifest."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from licensectl.commands._base import LicenseCommand

if TYPE_CHECKING:
    from licensectl.commands._context import AppContext


@click.command(
    cls=LicenseCommand,
    examples="""\
  licensectl generate
  licensectl generate dist/licenses.md
  licensectl generate --skip-preflight
  licensectl generate --no-install
  licensectl generate --check
  licensectl --json generate""",
)
@click.argument("destination", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--skip-preflight", is_flag=True, help="Do not verify the scanner version first.")
@click.option("--no-install", is_flag=True, help="Fail on a scanner version mismatch.")
@click.option(
    "--check",
    "check_only",
    is_flag=True,
    help="Fail if DESTINATION is not up to date; never writes.",
)
@click.pass_obj
def generate(
    app: AppContext,
    destination: Path | None,
    skip_preflight: bool,
    no_install: bool,
    check_only: bool,
) -> None:
    """Write the license manifest to DESTINATION (default: assets/licenses.md)."""
    manifest = app.settings.manifest
    # A path typed on the command line is relative to the shell, not the root.
    target = app.settings.destination_path(destination.resolve() if destination else None)

    sections = manifest.build_sections(app.settings.root)
    rules = manifest.build_rules()

    warnings: list[str] = []
    if app.settings.preflight.enabled and not skip_preflight:
        result = app.preflight().check(install=not no_install)
        if not result.ok:
            app.emit(result)
        warnings.extend(result.warnings)

    svc = app.aggregator()
    if check_only:
        result = svc.check(sections, rules, target)
    else:
        result = svc.aggregate(sections, rules, target)
    if warnings:
        result = result.model_copy(update={"warnings": [*warnings, *result.warnings]})
    app.emit(result)
