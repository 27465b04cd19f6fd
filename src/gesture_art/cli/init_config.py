from __future__ import annotations

from pathlib import Path

import typer

from ..config import Config
from . import options
from .common import app, setup_logging


@app.command("init-config")
def init_config_cmd(
    config_path: Path | None = options.config,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config file"),
    verbose: bool = options.verbose,
) -> None:
    """Write a config file holding all the default values, ready to be edited."""
    setup_logging(verbose)
    path = Config.validate_path(config_path)
    if path.exists() and not force:
        typer.echo(f"Config file {path} already exists, use --force to overwrite it.", err=True)
        raise typer.Exit(1)
    Config().save(path)
    typer.echo(f"Default config written to {path}")
