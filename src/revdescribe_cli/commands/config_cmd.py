from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import tomli_w

from revdescribe_core.config import CONFIG_FILENAME, ConfigLoader, DescribeSettings
from revdescribe_core.errors import ConfigError

app = typer.Typer(help="Configuration inspection")


def _starter_config() -> dict[str, Any]:
    defaults = DescribeSettings()
    return {
        "ref": defaults.ref,
        "abbrev": defaults.abbrev,
        "show_dirty": defaults.show_dirty,
    }


@app.command("show")
def config_show(
    repo: Path = typer.Option(Path("."), "--repo", "-C", help="Repository root to resolve config from"),
    config: Path | None = typer.Option(None, "--config", help="Explicit TOML config file"),
):
    """Print effective settings as JSON."""
    try:
        settings = ConfigLoader.load_settings(repo, config_path=config)
    except ConfigError as e:
        typer.echo(f"ConfigError: {e}")
        raise typer.Exit(1)
    typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2))


@app.command("init")
def config_init(
    repo: Path = typer.Option(Path("."), "--repo", "-C", help="Repository root"),
    write: bool = typer.Option(False, "--write", help="Write the file (default: dry-run)"),
):
    """Render a starter .revdescribe.toml (dry-run by default)."""
    target = repo / CONFIG_FILENAME
    toml_text = tomli_w.dumps(_starter_config())

    if not write:
        typer.echo(toml_text, nl=False)
        return

    if target.exists():
        typer.echo(f"Refusing to overwrite {target}")
        raise typer.Exit(1)
    target.write_text(toml_text, encoding="utf-8")
    typer.echo(f"Config written to: {target}")
