"""
describe.py - Print the description of a repository revision.

Meant for build tooling: the output (or ``NAME=value`` with ``--property``)
can be captured and stamped onto artifacts.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from revdescribe_core.config import ConfigLoader
from revdescribe_core.errors import DescribeError
from revdescribe_ops.describe import describe_repository

from ..util import configure_logging


def describe(
    repo: Path = typer.Option(Path("."), "--repo", "-C", help="Path inside the repository"),
    ref: str | None = typer.Option(None, "--ref", help="Reference to describe (default: HEAD)"),
    abbrev: int | None = typer.Option(None, "--abbrev", help="Abbreviated hash length (default: 7)"),
    subdir: str | None = typer.Option(None, "--subdir", help="Semicolon separated paths; describe the newest commit touching them"),
    dirty: bool = typer.Option(False, "--dirty", help="Append -dirty when the work tree has changes"),
    no_dirty: bool = typer.Option(False, "--no-dirty", help="Never append -dirty, even if configured"),
    config: Path | None = typer.Option(None, "--config", help="Explicit TOML config file"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: text|json"),
    property_name: str | None = typer.Option(None, "--property", help="Print NAME=<description> instead"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Also write the output to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """Describe a revision as <tag>-<distance>-g<hash>[-dirty]."""
    configure_logging(verbose)
    show_dirty = True if dirty else (False if no_dirty else None)
    if format not in ("text", "json"):
        typer.echo(f"Error: unknown format {format!r} (expected text or json)", err=True)
        raise typer.Exit(2)

    try:
        settings = ConfigLoader.load_settings(
            repo,
            config_path=config,
            overrides={"ref": ref, "abbrev": abbrev, "subdir": subdir, "show_dirty": show_dirty},
        )
        description = describe_repository(settings)
    except DescribeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if property_name:
        output = f"{property_name}={description}"
    elif format == "json":
        output = json.dumps(description.to_dict(), indent=2)
    else:
        output = str(description)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(output + "\n", encoding="utf-8")
    typer.echo(output)
