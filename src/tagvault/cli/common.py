"""Helpers shared by the tagvault commands: config loading and batch output."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from tagvault.config import ConfigError, VaultConfig, load_config
from tagvault.cli.errors import err_config
from tagvault.ops.base import BatchReport, ItemResult, ItemStatus

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Config file (default: ~/.config/tagvault/config.yaml)."),
]


def load_or_exit(console: Console, config_path: Path | None) -> VaultConfig:
    try:
        return load_config(config_path)
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(1)


def display_path(path: Path, base: Path) -> str:
    """*path* relative to *base* when possible, for compact output."""
    try:
        return str(path.resolve().relative_to(base.resolve()))
    except ValueError:
        return str(path)


def print_item(console: Console, result: ItemResult, base: Path, *, verbose: bool = False) -> None:
    shown = display_path(result.path, base)
    if result.status is ItemStatus.CHANGED:
        if result.destination is not None:
            console.print(f"  [green]✓[/] {shown} → {display_path(result.destination, base)}")
        else:
            console.print(f"  [green]✓[/] {shown}  [dim]({result.detail})[/]")
    elif result.status is ItemStatus.ERROR:
        console.print(f"  [red]✗[/] {shown}: {result.detail}")
    elif verbose:
        console.print(f"  [dim]↷ {shown} — {result.detail}[/]")


def print_summary(console: Console, report: BatchReport, action: str, changed_label: str) -> None:
    console.print(
        f"\n[bold]{action} complete:[/] "
        f"{report.changed} {changed_label}, "
        f"{report.skipped} unchanged, "
        f"{report.errored} errors"
    )
