"""tagvault rename — rename a directory in both the work and documentation trees.

Run from either side of a dir mapping:
  cd ~/Developer/old-name && tagvault rename new-name
  cd <vault>/Notas/dev/old-name && tagvault rename new-name

Documents in the renamed documentation directory are retagged afterwards
(old tag kept in aliases) unless --no-retag is given.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from tagvault.cli.common import ConfigOption, load_or_exit, print_item, print_summary
from tagvault.cli.errors import (
    err_collision,
    err_cross_tree,
    err_no_mapping,
    err_outside_tag_root,
)
from tagvault.ops.base import (
    CollisionError,
    CrossTreeRenameError,
    MappingNotFoundError,
    OutsideTagRootError,
    TargetNotFoundError,
    VaultOpError,
)
from tagvault.ops.rename import rename

console = Console()


def rename_cmd(
    new_name: Annotated[
        str,
        typer.Argument(help="New leaf name for the directory (no slashes)."),
    ],
    directory: Annotated[
        Path | None,
        typer.Option("--dir", help="Directory to rename (default: current directory)."),
    ] = None,
    no_retag: Annotated[
        bool,
        typer.Option("--no-retag", help="Skip retagging the renamed documentation directory."),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Rename the current directory and its mirror across the dir mapping."""
    cfg = load_or_exit(console, config)
    current = (directory or Path.cwd()).expanduser().absolute()

    try:
        result = rename(
            cfg,
            current,
            new_name,
            retag_after=not no_retag,
            on_item=lambda r: print_item(console, r, cfg.tag_root_path),
        )
    except TargetNotFoundError as exc:
        console.print(f"[red]Error:[/] {exc}\n  Both directories must exist before renaming.")
        raise typer.Exit(1)
    except OutsideTagRootError as exc:
        console.print(err_outside_tag_root(str(exc), cfg.tag_root_path))
        raise typer.Exit(1)
    except MappingNotFoundError as exc:
        console.print(err_no_mapping(str(exc)))
        raise typer.Exit(1)
    except CollisionError as exc:
        console.print(err_collision(str(exc)))
        raise typer.Exit(1)
    except CrossTreeRenameError as exc:
        console.print(err_cross_tree(str(exc), exc.rolled_back))
        raise typer.Exit(1)
    except VaultOpError as exc:
        console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(1)

    plan = result.plan
    console.print(f"[yellow]{plan.old_name}[/] → [green]{plan.new_name}[/]")
    console.print(f"  [dim]docs:[/] {plan.new_doc_dir}")
    console.print(f"  [dim]work:[/] {plan.new_work_dir}")

    report = result.retag_report
    if report is not None:
        print_summary(console, report, "Retag", "updated")
        if report.errored:
            raise typer.Exit(1)
