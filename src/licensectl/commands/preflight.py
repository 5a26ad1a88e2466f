"""Command: verify (and install) the pinned license scanner."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licensectl.commands._base import LicenseCommand

if TYPE_CHECKING:
    from licensectl.commands._context import AppContext


@click.command(
    cls=LicenseCommand,
    examples="""\
  licensectl preflight
  licensectl preflight --no-install
  licensectl --json preflight""",
)
@click.option("--no-install", is_flag=True, help="Report a mismatch instead of installing.")
@click.pass_obj
def preflight(app: AppContext, no_install: bool) -> None:
    """Check the license scanner version, installing the pinned one if needed."""
    app.emit(app.preflight().check(install=not no_install))
