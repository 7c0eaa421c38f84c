from __future__ import annotations

import typer

app = typer.Typer(help="revdescribe: git-describe style version strings without git")


# Subcommands are registered in commands/*.py
from .commands import config_cmd  # noqa: E402
from .commands.describe import describe as describe_fn  # noqa: E402
from .commands.parse import parse as parse_fn  # noqa: E402

app.command(name="describe")(describe_fn)
app.command(name="parse")(parse_fn)
app.add_typer(config_cmd.app, name="config", help="Configuration inspection")


def main():
    app()
