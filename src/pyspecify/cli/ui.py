"""Reusable UI helpers for pyspecify CLI interactions."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from pyspecify.errors import SelectionCancelledError

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    ERROR = "error"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self in (StepStatus.DONE, StepStatus.ERROR, StepStatus.SKIPPED)


@dataclass
class Step:
    key: str
    label: str
    status: StepStatus = StepStatus.PENDING
    detail: str = ""
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StepTracker:
    """Track and render ordered steps with Rich trees.

    Steps only move forward: pending -> running -> done/error/skipped.
    Once a step is terminal further updates are ignored. A refresh callback
    may redraw the tree from another thread (rich ``Live``); it runs under
    the same lock that guards the step list.
    """

    def __init__(self, title: str, clock: Callable[[], datetime] = _now):
        self.title = title
        self._steps: List[Step] = []
        self._lock = threading.RLock()
        self._refresh_cb: Optional[Callable[[], None]] = None
        self._clock = clock

    def attach_refresh(self, cb: Optional[Callable[[], None]]) -> None:
        with self._lock:
            self._refresh_cb = cb

    @property
    def steps(self) -> List[Step]:
        """Snapshot copy of the current steps."""
        with self._lock:
            return [replace(step) for step in self._steps]

    def get(self, key: str) -> Optional[Step]:
        with self._lock:
            for step in self._steps:
                if step.key == key:
                    return replace(step)
        return None

    def add(self, key: str, label: str) -> None:
        with self._lock:
            if any(step.key == key for step in self._steps):
                return
            self._steps.append(Step(key=key, label=label))
            self._maybe_refresh()

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, StepStatus.RUNNING, detail)

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, StepStatus.DONE, detail)

    def error(self, key: str, detail: str = "") -> None:
        self._update(key, StepStatus.ERROR, detail)

    def skip(self, key: str, detail: str = "") -> None:
        self._update(key, StepStatus.SKIPPED, detail)

    def _update(self, key: str, status: StepStatus, detail: str) -> None:
        with self._lock:
            step = next((s for s in self._steps if s.key == key), None)
            if step is None:
                step = Step(key=key, label=key)
                self._steps.append(step)

            if step.status.is_terminal or status is StepStatus.PENDING:
                logger.debug("Ignoring %s -> %s transition for step %s", step.status.value, status.value, key)
                return
            if status is StepStatus.RUNNING and step.status is StepStatus.RUNNING:
                if detail:
                    step.detail = detail
                    self._maybe_refresh()
                return

            now = self._clock()
            step.status = status
            if detail:
                step.detail = detail
            if status is StepStatus.RUNNING and step.started_at is None:
                step.started_at = now
            if status.is_terminal and step.ended_at is None:
                step.ended_at = now
            self._maybe_refresh()

    def _maybe_refresh(self) -> None:
        if self._refresh_cb is None:
            return
        try:
            self._refresh_cb()
        except Exception:  # rendering is best-effort
            logger.debug("Step tracker refresh callback failed", exc_info=True)

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            label = step.label
            detail_text = step.detail.strip() if step.detail else ""

            status = step.status
            if status is StepStatus.DONE:
                symbol = "[green]●[/green]"
            elif status is StepStatus.PENDING:
                symbol = "[green dim]○[/green dim]"
            elif status is StepStatus.RUNNING:
                symbol = "[cyan]○[/cyan]"
            elif status is StepStatus.ERROR:
                symbol = "[red]●[/red]"
            else:
                symbol = "[yellow]○[/yellow]"

            if status is StepStatus.PENDING:
                if detail_text:
                    line = f"{symbol} [bright_black]{label} ({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [bright_black]{label}[/bright_black]"
            else:
                if detail_text:
                    line = f"{symbol} [white]{label}[/white] [bright_black]({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [white]{label}[/white]"

            tree.add(line)
        return tree


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key == readchar.key.ENTER:
        return "enter"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def select_with_arrows(
    options: Dict[str, str],
    prompt_text: str = "Select an option",
    default_key: str | None = None,
    console: Console | None = None,
) -> str:
    """
    Interactive selection using arrow keys with Rich Live display.

    Raises:
        SelectionCancelledError: when the user presses Esc or Ctrl+C.
    """
    console = console or Console()
    option_keys = list(options.keys())
    if default_key and default_key in option_keys:
        selected_index = option_keys.index(default_key)
    else:
        selected_index = 0

    def create_selection_panel():
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, key in enumerate(option_keys):
            pointer = "▶" if i == selected_index else " "
            table.add_row(pointer, f"[cyan]{key}[/cyan] [dim]({options[key]})[/dim]")

        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()

    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                raise SelectionCancelledError("Selection cancelled") from None

            if key == "up":
                selected_index = (selected_index - 1) % len(option_keys)
            elif key == "down":
                selected_index = (selected_index + 1) % len(option_keys)
            elif key == "enter":
                return option_keys[selected_index]
            elif key == "escape":
                raise SelectionCancelledError("Selection cancelled")

            live.update(create_selection_panel(), refresh=True)


__all__ = [
    "Step",
    "StepStatus",
    "StepTracker",
    "get_key",
    "select_with_arrows",
]
