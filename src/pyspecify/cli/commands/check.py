"""Check command implementation."""

from __future__ import annotations

from typing import Callable

import typer
from rich.console import Console

from pyspecify.cli.ui import StepTracker
from pyspecify.core.config import AI_ASSISTANTS, GIT_DOWNLOAD_URL
from pyspecify.core.tools import check_tool


def tool_labels() -> list[tuple[str, str]]:
    labels = [("git", "Git version control")]
    for profile in AI_ASSISTANTS.values():
        if profile.cli_tool:
            labels.append((profile.cli_tool, profile.name))
    return labels


def check_tool_for_tracker(tool: str, tracker: StepTracker, checker: Callable[[str], bool]) -> bool:
    """Probe *tool* and record the outcome on the tracker."""
    tracker.start(tool)
    if checker(tool):
        tracker.complete(tool, "available")
        return True
    tracker.error(tool, "not found")
    return False


def register_check_command(app: typer.Typer, *, console: Console, show_banner: Callable[[], None]) -> None:
    def check() -> None:
        """Check that all required tools are installed."""
        show_banner()
        console.print("[bold]Checking for installed tools...[/bold]\n")

        tracker = StepTracker("Check Available Tools")
        labels = tool_labels()
        for key, label in labels:
            tracker.add(key, label)

        statuses = {key: check_tool_for_tracker(key, tracker, check_tool) for key, _ in labels}

        console.print(tracker.render())
        console.print("\n[bold green]Specify CLI is ready to use![/bold green]")

        if not statuses["git"]:
            console.print(f"[dim]Tip: Install git for repository management ({GIT_DOWNLOAD_URL})[/dim]")
        if not any(ok for key, ok in statuses.items() if key != "git"):
            console.print("[dim]Tip: Install an AI assistant for the best experience[/dim]")

    app.command()(check)


__all__ = ["check_tool_for_tracker", "register_check_command", "tool_labels"]
