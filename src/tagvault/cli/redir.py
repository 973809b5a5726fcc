"""tagvault redir — move documents to the directory matching their tag.

Usage:
  tagvault redir note.md
  tagvault redir .             (every document below the current directory)
  tagvault redir . --yes       (never prompt; ambiguous documents are skipped)
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from tagvault.cli.common import ConfigOption, load_or_exit, print_item, print_summary
from tagvault.cli.errors import err_target_not_found, warn_cache_stale
from tagvault.ops.base import TargetNotFoundError
from tagvault.ops.redir import TagChooser, redir
from tagvault.tags.path import TagPath

console = Console()


def _make_chooser(yes: bool) -> TagChooser | None:
    if yes:
        return None

    def _choose(path: Path, tags: list[TagPath]) -> TagPath | None:
        console.print(f"\n[bold]{path.name}[/] has {len(tags)} frontmatter tags:")
        for i, tag in enumerate(tags, start=1):
            console.print(f"  {i}. {tag}")
        answer = typer.prompt("  Destination tag (0 to skip)", type=int, default=1)
        if 1 <= answer <= len(tags):
            return tags[answer - 1]
        console.print("  [dim]Skipped.[/]")
        return None

    return _choose


def redir_cmd(
    target: Annotated[
        Path,
        typer.Argument(help="Document or directory to move ('.' for the current directory)."),
    ],
    no_bak: Annotated[
        bool,
        typer.Option("--no-bak", help="Do not write .bak copies before moving documents."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip tag selection prompts; ambiguous documents are left in place."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Also list documents that stay in place."),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Move each document under the notes directory according to its tag."""
    cfg = load_or_exit(console, config)
    target = target.expanduser().absolute()

    is_batch = target.is_dir()
    if is_batch:
        console.print(f"Moving documents in: [bold]{target}[/]")

    base = cfg.vault
    try:
        report = redir(
            cfg,
            target,
            backup=not no_bak,
            choose=_make_chooser(yes),
            on_item=lambda r: print_item(console, r, base, verbose=verbose or not is_batch),
        )
    except TargetNotFoundError:
        console.print(err_target_not_found(target))
        raise typer.Exit(1)

    print_summary(console, report, "Redir", "moved")
    if report.changed:
        console.print(warn_cache_stale())
    if report.errored:
        raise typer.Exit(1)
