"""Allow ``python -m translate_spine``."""

from translate_spine.cli.app import app

app()
