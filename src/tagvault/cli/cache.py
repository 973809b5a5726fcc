"""tagvault cache — regenerate the tag caches.

Usage:
  tagvault cache                  (both caches)
  tagvault cache --kind dir-tags  (primary-tag / directory cache only)
"""

from __future__ import annotations

import enum
from typing import Annotated

import typer
from rich.console import Console

from tagvault.cli.common import ConfigOption, load_or_exit
from tagvault.cli.errors import err_cache_write
from tagvault.tags.cache import TagCache

console = Console()


class CacheKind(str, enum.Enum):
    all = "all"
    dir_tags = "dir-tags"


def cache_cmd(
    kind: Annotated[
        CacheKind,
        typer.Option("--kind", "-k", help="Which cache to rebuild."),
    ] = CacheKind.all,
    config: ConfigOption = None,
) -> None:
    """Rescan the vault and overwrite the tag caches."""
    cfg = load_or_exit(console, config)
    cache = TagCache(cfg.cache_dir, cfg.vault, cfg.templates_path)

    try:
        if kind is CacheKind.all:
            tree, index = cache.update_all()
            console.print(
                f"[green]✓[/] Tag cache regenerated: {tree.count()} tags "
                f"→ [dim]{cache.tags_path}[/]"
            )
        else:
            index = cache.update_primary()
    except OSError as exc:
        console.print(err_cache_write(cfg.cache_dir, str(exc)))
        raise typer.Exit(1)

    console.print(
        f"[green]✓[/] Dir-tag cache regenerated: {len(index.dirs_by_tag)} primary tags "
        f"→ [dim]{cache.primary_path}[/]"
    )
