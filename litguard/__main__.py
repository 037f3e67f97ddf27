"""Allow ``python -m litguard``."""

from litguard.main import cli

cli()
