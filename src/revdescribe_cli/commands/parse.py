from __future__ import annotations

import json

import typer

from revdescribe_core.models import Description


def parse(
    text: str = typer.Argument(..., help="Description such as v1.2-3-gabc1234-dirty"),
):
    """Split a description into tag, distance, hash and dirty flag."""
    try:
        description = Description.parse(text)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(description.to_dict(), indent=2))
