"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Builds services from settings and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licensectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from licensectl.config.settings import LicenseSettings
    from licensectl.services.aggregate import AggregateService
    from licensectl.services.preflight import PreflightService
    from licensectl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: LicenseSettings) -> None:
        self.settings = settings

        from licensectl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def aggregator(self) -> AggregateService:
        from licensectl.services.aggregate import AggregateService

        return AggregateService(self.settings.root)

    def preflight(self) -> PreflightService:
        from licensectl.services.preflight import PreflightService

        return PreflightService(self.settings.root, self.settings.preflight)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
