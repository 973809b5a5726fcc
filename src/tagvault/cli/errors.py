"""tagvault rich error messages — actionable feedback.

Every error shown to the user contains:
  1. What went wrong, including the offending path
  2. What to do about it

Usage:
    from tagvault.cli.errors import err_target_not_found
    console.print(err_target_not_found(path))
    raise typer.Exit(1)
"""

from __future__ import annotations

from pathlib import Path


def err_config(message: str) -> str:
    """Configuration could not be loaded."""
    return (
        f"[red]Error:[/] {message}\n"
        "  Run:  tagvault init   to create a starter config."
    )


def err_target_not_found(target: Path | str) -> str:
    """File or directory passed to retag/redir does not exist."""
    return (
        f"[red]Error:[/] Target not found: '{target}'\n"
        "  Use a document path or a directory inside the vault (e.g. '.')."
    )


def err_outside_tag_root(detail: str, tag_root: Path) -> str:
    """Path is not below the configured tag root."""
    return (
        f"[red]Error:[/] {detail}\n"
        f"  Run the command from inside '{tag_root}' or fix 'tag_root' in the config."
    )


def err_no_mapping(detail: str) -> str:
    """No dir mapping covers the directory being renamed."""
    return (
        f"[red]Error:[/] {detail}\n"
        "  Add an entry to 'dir_mappings' in the config:\n"
        "    dir_mappings:\n"
        "      ~/Developer: dev"
    )


def err_collision(detail: str) -> str:
    """Destination already exists — nothing was changed."""
    return (
        f"[red]Error:[/] {detail}\n"
        "  Nothing was changed. Choose another name or move the existing entry away."
    )


def err_cross_tree(detail: str, rolled_back: bool) -> str:
    """Second half of a dual rename failed."""
    if rolled_back:
        return (
            f"[red]Error:[/] {detail}\n"
            "  Both trees are unchanged. Fix the cause and run the rename again."
        )
    return (
        f"[red]Error:[/] {detail}\n"
        "  Rename the remaining directory by hand, then run:  tagvault retag <doc-dir>"
    )


def err_cache_write(path: Path, detail: str) -> str:
    """Cache file could not be written."""
    return (
        f"[red]Error:[/] Could not write cache '{path}': {detail}\n"
        "  Check permissions on the cache directory or set 'cache_dir' in the config."
    )


def warn_cache_stale() -> str:
    """Shown after operations that move or retag documents."""
    return (
        "[yellow]⚠[/] Tag caches are not updated automatically.\n"
        "  Run:  tagvault cache   to regenerate them."
    )
