"""Init command implementation for pyspecify."""

from __future__ import annotations

import logging
import os
import shlex
import sys
from typing import Callable, Mapping, Optional

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel

from pyspecify.cli.commands.init_help import INIT_COMMAND_DOC
from pyspecify.cli.helpers import configure_logging, print_error
from pyspecify.cli.ui import select_with_arrows
from pyspecify.core.config import (
    DEFAULT_ASSISTANT,
    SLASH_COMMANDS,
    default_script_type_key,
)
from pyspecify.core.project import ProjectConfig
from pyspecify.core.settings import InitDefaults, load_defaults
from pyspecify.core.tools import check_tool, init_git_repo
from pyspecify.errors import SpecifyError
from pyspecify.orchestrator import (
    FlagSelection,
    InitializationOrchestrator,
    InitResult,
    InteractiveSelection,
    SelectionStrategy,
    new_tracker,
)

logger = logging.getLogger(__name__)

Chooser = Callable[[Mapping[str, str], str, str], str]


def _is_interactive() -> bool:
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def _selection(flag_value: str | None, saved: str, default: str, chooser: Chooser | None) -> SelectionStrategy:
    if flag_value:
        return FlagSelection(flag_value)
    if saved:
        return FlagSelection(saved)
    if chooser is not None:
        return InteractiveSelection(chooser)
    return FlagSelection(default)


def print_init_summary(console: Console, config: ProjectConfig, result: InitResult) -> None:
    """Security notice and next steps shown after a successful init."""
    assistant = result.assistant

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    body_lines = [
        "Some agents may store credentials, auth tokens, or other identifying and private artifacts in the agent folder within your project.",
        f"Consider adding [cyan]{assistant.folder}[/cyan] (or parts of it) to [cyan].gitignore[/cyan] to prevent accidental credential leakage.",
    ]
    console.print()
    console.print(
        Panel(
            "\n".join(body_lines),
            title="[yellow]Agent Folder Security[/yellow]",
            border_style="yellow",
            padding=(1, 2),
        )
    )

    steps_lines = []
    if not config.here:
        steps_lines.append(f"1. Go to the project folder: [cyan]cd {config.display_name}[/cyan]")
    else:
        steps_lines.append("1. You're already in the project directory!")
    step_num = 2

    if assistant.key == "codex":
        quoted_path = shlex.quote(str(result.project_path / ".codex"))
        if os.name == "nt":
            cmd = f"setx CODEX_HOME {quoted_path}"
        else:
            cmd = f"export CODEX_HOME={quoted_path}"
        steps_lines.append(f"{step_num}. Set [cyan]CODEX_HOME[/cyan] environment variable before running Codex: [cyan]{cmd}[/cyan]")
        step_num += 1

    steps_lines.append(f"{step_num}. Start using slash commands with {assistant.name}:")
    for index, (command, description) in enumerate(SLASH_COMMANDS, start=1):
        steps_lines.append(f"   {step_num}.{index} [cyan]/{command}[/] - {description}")

    console.print()
    console.print(Panel("\n".join(steps_lines), title="Next Steps", border_style="cyan", padding=(1, 2)))


def register_init_command(
    app: typer.Typer,
    *,
    console: Console,
    show_banner: Callable[[], None],
    choose: Chooser | None = None,
    read_defaults: Callable[[], InitDefaults] = load_defaults,
    interactive: Callable[[], bool] = _is_interactive,
) -> None:
    """Register the ``init`` command with injected dependencies."""

    def default_chooser(options: Mapping[str, str], prompt: str, default: str) -> str:
        return select_with_arrows(dict(options), prompt, default, console=console)

    def init(
        project_name: Optional[str] = typer.Argument(None, help="Name for your new project directory (optional if using --here, or use '.' for current directory)"),
        ai_assistant: Optional[str] = typer.Option(None, "--ai", help="AI assistant to use: claude, gemini, copilot, cursor, qwen, opencode, codex, windsurf, kilocode, auggie or roo"),
        script_type: Optional[str] = typer.Option(None, "--script", help="Script type to use: sh or ps"),
        ignore_agent_tools: bool = typer.Option(False, "--ignore-agent-tools", help="Skip checks for AI agent tools like Claude Code"),
        no_git: bool = typer.Option(False, "--no-git", help="Skip git repository initialization"),
        here: bool = typer.Option(False, "--here", help="Initialize project in the current directory instead of creating a new one"),
        force: bool = typer.Option(False, "--force", help="Allow --here in a non-empty directory (existing files may be overwritten)"),
        skip_tls: bool = typer.Option(False, "--skip-tls", help="Skip SSL/TLS verification (not recommended)"),
        debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output"),
        github_token: Optional[str] = typer.Option(None, "--github-token", help="GitHub token to use for API requests (or set GH_TOKEN or GITHUB_TOKEN environment variable)"),
    ) -> None:
        configure_logging(debug)
        show_banner()

        try:
            defaults = read_defaults()
        except SpecifyError as exc:
            print_error(console, exc, title="Invalid Settings", debug=debug)
            raise typer.Exit(1) from exc
        if defaults.source is not None:
            console.print(f"[dim]Using defaults from {defaults.source}[/dim]")

        config = ProjectConfig(
            name=project_name,
            here=here,
            force=force,
            no_git=no_git or defaults.no_git,
            ignore_agent_tools=ignore_agent_tools or defaults.ignore_agent_tools,
            skip_tls=skip_tls,
            debug=debug,
            github_token=github_token,
        )

        live_holder: list[Live] = []
        chooser: Chooser | None = None
        if interactive():
            pick = choose or default_chooser

            def chooser(options: Mapping[str, str], prompt: str, default: str) -> str:
                # The selector draws its own Live panel.
                live = live_holder[0] if live_holder else None
                if live is not None:
                    live.stop()
                try:
                    return pick(options, prompt, default)
                finally:
                    if live is not None:
                        live.start(refresh=True)

        tracker = new_tracker()
        orchestrator = InitializationOrchestrator(
            config,
            tracker=tracker,
            assistant_selection=_selection(ai_assistant, defaults.ai, DEFAULT_ASSISTANT, chooser),
            script_selection=_selection(script_type, defaults.script, default_script_type_key(os.name), chooser),
            tool_checker=check_tool,
            git_initializer=init_git_repo,
        )

        error: SpecifyError | None = None
        with Live(tracker.render(), console=console, refresh_per_second=8, transient=True) as live:
            live_holder.append(live)
            tracker.attach_refresh(lambda: live.update(tracker.render()))
            try:
                result = orchestrator.run()
            except SpecifyError as exc:
                error = exc
            finally:
                tracker.attach_refresh(None)

        console.print(tracker.render())

        if error is not None:
            logger.debug("Initialization failed", exc_info=error)
            print_error(console, error, title="Initialization Failed", debug=debug)
            raise typer.Exit(1)

        console.print("\n[bold green]Project ready.[/bold green]")
        print_init_summary(console, config, result)

    init.__doc__ = INIT_COMMAND_DOC
    app.command()(init)


__all__ = ["print_init_summary", "register_init_command"]
