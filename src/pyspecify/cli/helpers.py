"""Shared console, banner and error output for CLI commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from typer.core import TyperGroup

from pyspecify.core.config import BANNER, BANNER_COLORS, TAGLINE
from pyspecify.errors import SpecifyError, ToolNotFoundError

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

console = Console()


def configure_logging(debug: bool = False) -> None:
    """Route library logging to stderr; verbose only with ``--debug``."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def show_banner(target: Console | None = None) -> None:
    """Display the ASCII art banner."""
    target = target or console
    banner_lines = BANNER.strip().split("\n")

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        color = BANNER_COLORS[i % len(BANNER_COLORS)]
        styled_banner.append(line + "\n", style=color)

    target.print(Align.center(styled_banner))
    target.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    target.print()


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


def print_error(target: Console, exc: SpecifyError, *, title: str = "Error", debug: bool = False) -> None:
    """Render a typed error as a red panel, with an install hint for missing tools."""
    lines = [f"[red]{escape(str(exc))}[/red]"]
    if isinstance(exc, ToolNotFoundError) and exc.install_hint:
        lines.append("")
        lines.append(f"Install from: [cyan]{exc.install_hint}[/cyan]")
        lines.append("Tip: use [cyan]--ignore-agent-tools[/cyan] to skip this check")
    if debug:
        lines.append("")
        lines.append(f"[bright_black]code: {exc.code}[/bright_black]")
    target.print(Panel("\n".join(lines), title=f"[red]{title}[/red]", border_style="red", padding=(1, 2)))

    if debug:
        env_pairs = [
            ("Python", sys.version.split()[0]),
            ("Platform", sys.platform),
            ("CWD", str(Path.cwd())),
        ]
        label_width = max(len(k) for k, _ in env_pairs)
        env_lines = [f"{k.ljust(label_width)} → [bright_black]{v}[/bright_black]" for k, v in env_pairs]
        target.print(Panel("\n".join(env_lines), title="Debug Environment", border_style="magenta"))


__all__ = [
    "BannerGroup",
    "LOG_FORMAT",
    "configure_logging",
    "console",
    "print_error",
    "show_banner",
]
