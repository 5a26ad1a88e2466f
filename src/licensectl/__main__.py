"""Allow ``python -m licensectl``."""

from licensectl.cli import cli

cli()
