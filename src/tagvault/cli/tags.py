"""tagvault tags CLI commands.

Commands:
  tagvault tags list [--all] [--refresh]  — cached tag tree
  tagvault tags find TAG                  — documents carrying TAG (or a subtag)
  tagvault tags dirs                      — primary tag → directories
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from tagvault.cli.common import ConfigOption, display_path, load_or_exit
from tagvault.tags.cache import TagCache
from tagvault.tags.path import TagPath
from tagvault.tags.scanner import documents_with_tag, scan_vault
from tagvault.tags.tree import TagNode

console = Console()

tags_app = typer.Typer(
    name="tags",
    help="Browse tags (list, find, dirs).",
    add_completion=False,
)

ARCHIVED = "Archived"


def _add_branch(branch: Tree, node: TagNode, include_archived: bool) -> None:
    for child in node.sorted_children():
        if not include_archived and child.name == ARCHIVED:
            continue
        _add_branch(branch.add(child.name), child, include_archived)


@tags_app.command("list")
def tags_list_cmd(
    include_archived: Annotated[
        bool,
        typer.Option("--all", "-a", help="Include tags with an 'Archived' segment."),
    ] = False,
    refresh: Annotated[
        bool,
        typer.Option("--refresh", help="Rescan the vault before listing."),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Show the tag tree from the tag cache."""
    cfg = load_or_exit(console, config)
    cache = TagCache(cfg.cache_dir, cfg.vault, cfg.templates_path)
    root = cache.update() if refresh else cache.load()

    if root.is_empty():
        console.print("[yellow]No tags found in the vault.[/]")
        raise typer.Exit(0)

    tree = Tree(f"[bold]{cfg.vault.name}[/]")
    _add_branch(tree, root, include_archived)
    console.print(tree)


@tags_app.command("find")
def tags_find_cmd(
    tag: Annotated[
        str,
        typer.Argument(help="Tag to search for, e.g. proj/client."),
    ],
    config: ConfigOption = None,
) -> None:
    """List documents tagged TAG or any of its subtags (fresh scan)."""
    cfg = load_or_exit(console, config)
    wanted = TagPath.maybe(tag)
    if wanted is None:
        console.print(f"[red]Error:[/] Invalid tag: '{tag}'\n  Use:  tagvault tags find parent/child")
        raise typer.Exit(1)

    matches = documents_with_tag(scan_vault(cfg.vault, cfg.templates_path), wanted)
    if not matches:
        console.print(f"[yellow]No documents tagged '{wanted}'.[/]")
        raise typer.Exit(0)

    for item in matches:
        primary = f"  [dim]{{ #{item.primary_tag} }}[/]" if item.primary_tag else ""
        console.print(f"  {display_path(item.path, cfg.vault)}{primary}")
    console.print(f"\n  {len(matches)} documents")


@tags_app.command("dirs")
def tags_dirs_cmd(
    config: ConfigOption = None,
) -> None:
    """Show which directories hold the documents of each primary tag."""
    cfg = load_or_exit(console, config)
    index = TagCache(cfg.cache_dir, cfg.vault, cfg.templates_path).load_primary()

    if not index.dirs_by_tag:
        console.print("[yellow]No primary tags found in the vault.[/]")
        raise typer.Exit(0)

    table = Table(title="Primary tags", show_header=True, header_style="bold")
    table.add_column("Tag", style="bold")
    table.add_column("Directories")

    ambiguous = index.ambiguous()
    for tag, dirs in index.dirs_by_tag.items():
        label = f"[yellow]{tag} ⚠[/]" if tag in ambiguous else tag
        table.add_row(label, "\n".join(d or "." for d in dirs))

    console.print(table)
    if ambiguous:
        console.print(f"\n  [yellow]{len(ambiguous)} tags span more than one directory[/]")
