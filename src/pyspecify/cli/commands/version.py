"""Version command implementation."""

from __future__ import annotations

from typing import Callable, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pyspecify import github
from pyspecify.cli.helpers import configure_logging, print_error
from pyspecify.core.config import BUILD_DATE, COMMIT, GITHUB_OWNER, GITHUB_REPO, VERSION
from pyspecify.errors import GitHubAPIError


def register_version_command(app: typer.Typer, *, console: Console, show_banner: Callable[[], None]) -> None:
    def version(
        latest: bool = typer.Option(False, "--latest", help=f"Also query GitHub for the latest {GITHUB_OWNER}/{GITHUB_REPO} release"),
        skip_tls: bool = typer.Option(False, "--skip-tls", help="Skip SSL/TLS verification (not recommended)"),
        github_token: Optional[str] = typer.Option(None, "--github-token", help="GitHub token to use for API requests (or set GH_TOKEN or GITHUB_TOKEN environment variable)"),
        debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output"),
    ) -> None:
        """Show version information."""
        configure_logging(debug)
        show_banner()

        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="right")
        table.add_column(style="white")
        table.add_row("Version", VERSION)
        table.add_row("Commit", COMMIT)
        table.add_row("Built", BUILD_DATE)

        if latest:
            try:
                with github.build_http_client(skip_tls=skip_tls) as client:
                    release = github.get_latest_release(client, token=github_token)
            except GitHubAPIError as exc:
                console.print(Panel(table, title="pyspecify", border_style="cyan", padding=(1, 2)))
                print_error(console, exc, title="Fetch Error", debug=debug)
                raise typer.Exit(1) from exc
            table.add_row("Latest release", release.tag_name or "unknown")
            if release.published_at:
                table.add_row("Published", release.published_at)

        console.print(Panel(table, title="pyspecify", border_style="cyan", padding=(1, 2)))

    app.command()(version)


__all__ = ["register_version_command"]
