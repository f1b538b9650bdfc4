"""
pyspecify - bootstrap Spec-Driven Development projects from bundled templates.

Usage:
    pyspecify init <project-name>
    pyspecify init .
    pyspecify init --here
    pyspecify check
    pyspecify version
"""

from __future__ import annotations

import sys

import typer
from rich.align import Align

from pyspecify.cli.commands import (
    register_check_command,
    register_init_command,
    register_version_command,
)
from pyspecify.cli.helpers import BannerGroup, console, show_banner
from pyspecify.core.config import VERSION

__version__ = VERSION

app = typer.Typer(
    name="pyspecify",
    help="Setup tool for Specify spec-driven development projects",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


@app.callback()
def callback(ctx: typer.Context):
    """Show banner when no subcommand is provided."""
    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        show_banner()
        console.print(Align.center("[dim]Run 'pyspecify --help' for usage information[/dim]"))
        console.print()


register_init_command(app, console=console, show_banner=show_banner)
register_check_command(app, console=console, show_banner=show_banner)
register_version_command(app, console=console, show_banner=show_banner)


def main():
    app()


if __name__ == "__main__":
    main()
