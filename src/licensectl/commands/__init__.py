"""Subcommand modules for licensectl.

Provides register_commands() which uses deferred imports to keep
``licensectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from licensectl.commands.generate import generate
    from licensectl.commands.preflight import preflight
    from licensectl.commands.sections import sections

    cli.add_command(generate)
    cli.add_command(preflight)
    cli.add_command(sections)
