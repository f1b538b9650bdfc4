from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from pyspecify.cli import ui
from pyspecify.cli.ui import StepStatus, StepTracker, select_with_arrows
from pyspecify.errors import SelectionCancelledError


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


def _render(tracker: StepTracker) -> str:
    console = Console(file=io.StringIO(), force_terminal=False, width=120)
    console.print(tracker.render())
    return console.file.getvalue()


def test_steps_follow_lifecycle() -> None:
    tracker = StepTracker("Demo", clock=FakeClock())
    tracker.add("fetch", "Fetch")

    tracker.start("fetch")
    assert tracker.get("fetch").status is StepStatus.RUNNING
    tracker.complete("fetch", "ok")

    step = tracker.get("fetch")
    assert step.status is StepStatus.DONE
    assert step.detail == "ok"
    assert step.started_at < step.ended_at


def test_terminal_steps_ignore_further_updates() -> None:
    tracker = StepTracker("Demo", clock=FakeClock())
    tracker.add("git", "Git")
    tracker.start("git")
    tracker.error("git", "boom")
    ended_at = tracker.get("git").ended_at

    tracker.complete("git", "fine")
    tracker.start("git")
    tracker.skip("git")

    step = tracker.get("git")
    assert step.status is StepStatus.ERROR
    assert step.detail == "boom"
    assert step.ended_at == ended_at


def test_add_is_idempotent_and_keeps_order() -> None:
    tracker = StepTracker("Demo")
    tracker.add("a", "A")
    tracker.add("b", "B")
    tracker.add("a", "Again")

    assert [(s.key, s.label) for s in tracker.steps] == [("a", "A"), ("b", "B")]


def test_steps_snapshot_is_a_copy() -> None:
    tracker = StepTracker("Demo")
    tracker.add("a", "A")

    tracker.steps[0].status = StepStatus.DONE

    assert tracker.get("a").status is StepStatus.PENDING


def test_unknown_step_is_appended() -> None:
    tracker = StepTracker("Demo")
    tracker.skip("extra", "not needed")

    assert tracker.get("extra").status is StepStatus.SKIPPED


def test_refresh_callback_failure_is_swallowed() -> None:
    tracker = StepTracker("Demo")
    calls: list[str] = []

    def broken_refresh() -> None:
        calls.append("refresh")
        raise RuntimeError("display gone")

    tracker.attach_refresh(broken_refresh)
    tracker.add("a", "A")
    tracker.start("a")
    tracker.complete("a")

    assert len(calls) == 3
    assert tracker.get("a").status is StepStatus.DONE


def test_render_shows_labels_and_details() -> None:
    tracker = StepTracker("Initialize Specify Project")
    tracker.add("templates", "Process templates")
    tracker.add("git", "Initialize git repository")
    tracker.start("templates")
    tracker.complete("templates", "12 files")

    output = _render(tracker)

    assert "Initialize Specify Project" in output
    assert "Process templates (12 files)" in output
    assert "Initialize git repository" in output


def _fake_keys(monkeypatch: pytest.MonkeyPatch, keys: list[str]) -> None:
    sequence = iter(keys)
    monkeypatch.setattr(ui, "get_key", lambda: next(sequence))


def test_select_with_arrows_moves_and_wraps(monkeypatch: pytest.MonkeyPatch) -> None:
    _fake_keys(monkeypatch, ["up", "enter"])
    console = Console(file=io.StringIO(), force_terminal=False)

    choice = select_with_arrows({"sh": "Shell", "ps": "PowerShell"}, "Pick", default_key="sh", console=console)

    assert choice == "ps"


def test_select_with_arrows_escape_cancels(monkeypatch: pytest.MonkeyPatch) -> None:
    _fake_keys(monkeypatch, ["down", "escape"])
    console = Console(file=io.StringIO(), force_terminal=False)

    with pytest.raises(SelectionCancelledError):
        select_with_arrows({"a": "A", "b": "B"}, "Pick", console=console)
