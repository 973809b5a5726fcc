"""tagvault retag — rewrite primary tags to match document locations.

Usage:
  tagvault retag note.md
  tagvault retag .              (every document below the current directory)
  tagvault retag . --no-bak --no-alias
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from tagvault.cli.common import ConfigOption, load_or_exit, print_item, print_summary
from tagvault.cli.errors import err_target_not_found, warn_cache_stale
from tagvault.ops.base import TargetNotFoundError
from tagvault.ops.retag import retag

console = Console()


def retag_cmd(
    target: Annotated[
        Path,
        typer.Argument(help="Document or directory to retag ('.' for the current directory)."),
    ],
    no_bak: Annotated[
        bool,
        typer.Option("--no-bak", help="Do not write .bak copies before modifying documents."),
    ] = False,
    no_alias: Annotated[
        bool,
        typer.Option("--no-alias", help="Do not record the old tag in frontmatter aliases."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Also list unchanged documents."),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Derive each document's primary tag from its directory and rewrite it."""
    cfg = load_or_exit(console, config)
    target = target.expanduser().absolute()

    is_batch = target.is_dir()
    if is_batch:
        console.print(f"Retagging documents in: [bold]{target}[/]")

    base = target if is_batch else target.parent
    try:
        report = retag(
            cfg,
            target,
            backup=not no_bak,
            keep_alias=not no_alias,
            on_item=lambda r: print_item(console, r, base, verbose=verbose or not is_batch),
        )
    except TargetNotFoundError:
        console.print(err_target_not_found(target))
        raise typer.Exit(1)

    print_summary(console, report, "Retag", "updated")
    if report.changed:
        console.print(warn_cache_stale())
    if report.errored:
        raise typer.Exit(1)
