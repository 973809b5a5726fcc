"""tagvault init — write a starter config file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from tagvault.config import default_config_path, ensure_config

console = Console()


def init_cmd(
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Where to write the config (default: ~/.config/tagvault/config.yaml)."),
    ] = None,
) -> None:
    """Create the config file with defaults if it does not exist yet."""
    target = config if config is not None else default_config_path()
    existed = target.exists()
    path = ensure_config(target)

    if existed:
        console.print(f"[dim]Config already exists:[/] {path}")
        return
    console.print(f"[green]✓[/] Created {path}")
    console.print("  Edit 'vault' and 'dir_mappings', then run:  tagvault cache")
