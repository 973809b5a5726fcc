"""tagvault CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from tagvault.cli.cache import cache_cmd
from tagvault.cli.init import init_cmd
from tagvault.cli.redir import redir_cmd
from tagvault.cli.rename import rename_cmd
from tagvault.cli.retag import retag_cmd
from tagvault.cli.tags import tags_app


def _installed_version() -> str:
    try:
        return importlib.metadata.version("tagvault")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tagvault {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="tagvault",
    help=(
        "tagvault — keep note tags and vault locations in sync.\n\n"
        "  tagvault retag .   Tag documents after the directory they live in.\n"
        "  tagvault redir .   Move documents to the directory their tag names.\n"
        "  tagvault rename N  Rename a work dir and its documentation mirror."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """tagvault — keep note tags and vault locations in sync."""


app.command("init")(init_cmd)
app.command("retag")(retag_cmd)
app.command("redir")(redir_cmd)
app.command("rename")(rename_cmd)
app.command("cache")(cache_cmd)
app.add_typer(tags_app, name="tags")


@app.command("version")
def version_cmd() -> None:
    """Show the installed tagvault version."""
    typer.echo(f"tagvault {_installed_version()}")


if __name__ == "__main__":
    app()
