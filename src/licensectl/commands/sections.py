"""Command: list configured manifest sections."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licensectl.commands._base import LicenseCommand

if TYPE_CHECKING:
    from licensectl.commands._context import AppContext


@click.command(
    cls=LicenseCommand,
    examples="""\
  licensectl sections
  licensectl --json sections""",
)
@click.pass_obj
def sections(app: AppContext) -> None:
    """Show the sections in output order, without reading or running them."""
    built = app.settings.manifest.build_sections(app.settings.root)
    app.emit(app.aggregator().describe(built))
