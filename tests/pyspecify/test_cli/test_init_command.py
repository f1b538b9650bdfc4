from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console
from typer import Typer
from typer.testing import CliRunner

from pyspecify.cli.commands import init as init_module
from pyspecify.cli.commands.init import register_init_command
from pyspecify.core.settings import InitDefaults
from pyspecify.errors import SettingsError


@pytest.fixture()
def git_calls(monkeypatch: pytest.MonkeyPatch) -> list[Path]:
    calls: list[Path] = []
    monkeypatch.setattr(init_module, "check_tool", lambda tool: True)
    monkeypatch.setattr(init_module, "init_git_repo", lambda path: calls.append(path))
    return calls


def _build_app(defaults: InitDefaults | None = None, choose=None) -> tuple[Typer, Console, list[str]]:
    console = Console(file=io.StringIO(), force_terminal=False, width=200)
    outputs: list[str] = []
    app = Typer()

    @app.callback()
    def main() -> None:
        """Test entry point."""

    def fake_show_banner():  # noqa: D401
        outputs.append("banner")

    register_init_command(
        app,
        console=console,
        show_banner=fake_show_banner,
        choose=choose,
        read_defaults=lambda: defaults or InitDefaults(),
        interactive=lambda: choose is not None,
    )
    return app, console, outputs


def _invoke(app: Typer, args: list[str], expected_exit: int = 0):
    result = CliRunner().invoke(app, args, catch_exceptions=False)
    assert result.exit_code == expected_exit, result.output
    return result


def test_init_creates_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, console, outputs = _build_app()

    _invoke(app, ["init", "demo", "--ai", "claude", "--script", "sh"])

    project = tmp_path / "demo"
    assert (project / ".claude" / "commands" / "plan.md").is_file()
    assert (project / ".specify" / "scripts" / "create-new-feature.sh").is_file()
    assert git_calls == [project.resolve()]
    assert outputs == ["banner"]

    text = console.file.getvalue()
    assert "Project ready." in text
    assert "Agent Folder Security" in text
    assert ".claude/" in text
    assert "cd demo" in text
    assert "/specify" in text


def test_init_copilot_prompt_files(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, _, _ = _build_app()

    _invoke(app, ["init", "demo", "--ai", "copilot", "--script", "ps", "--no-git"])

    prompts = tmp_path / "demo" / ".github" / "prompts"
    assert (prompts / "specify.prompt.md").is_file()
    assert not (prompts / "specify.prompt").exists()
    assert git_calls == []


def test_init_dot_uses_current_directory(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, console, _ = _build_app()

    _invoke(app, ["init", ".", "--ai", "gemini"])

    assert (tmp_path / ".gemini" / "commands" / "specify.toml").is_file()
    assert "already in the project directory" in console.file.getvalue()


def test_init_here_non_empty_requires_force(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "notes.txt").write_text("keep", encoding="utf-8")
    app, console, _ = _build_app()

    _invoke(app, ["init", "--here", "--ai", "claude"], expected_exit=1)
    assert "not empty" in console.file.getvalue()
    assert not (tmp_path / ".specify").exists()

    _invoke(app, ["init", "--here", "--force", "--ai", "claude"])
    assert (tmp_path / ".specify").is_dir()
    assert (tmp_path / "notes.txt").read_text(encoding="utf-8") == "keep"


def test_init_rejects_name_with_here(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, console, _ = _build_app()

    _invoke(app, ["init", "demo", "--here", "--ai", "claude"], expected_exit=1)

    assert "Cannot specify both" in console.file.getvalue()
    assert list(tmp_path.iterdir()) == []


def test_init_dot_with_here_flag_is_rejected(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, console, _ = _build_app()

    _invoke(app, ["init", ".", "--here", "--ai", "claude"], expected_exit=1)

    assert "Cannot specify both" in console.file.getvalue()
    assert list(tmp_path.iterdir()) == []


def test_init_requires_name(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, console, _ = _build_app()

    _invoke(app, ["init", "--ai", "claude"], expected_exit=1)

    assert "Must specify either a project name" in console.file.getvalue()


def test_init_unknown_assistant(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, console, _ = _build_app()

    _invoke(app, ["init", "demo", "--ai", "nope"], expected_exit=1)

    assert "Unknown AI assistant: nope" in console.file.getvalue()
    assert not (tmp_path / "demo").exists()


def test_init_missing_agent_tool(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(init_module, "check_tool", lambda tool: tool == "git")
    app, console, _ = _build_app()

    _invoke(app, ["init", "demo", "--ai", "claude"], expected_exit=1)

    text = console.file.getvalue()
    assert "required tool not found: claude" in text
    assert "--ignore-agent-tools" in text


def test_init_codex_prints_codex_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, console, _ = _build_app()

    _invoke(app, ["init", "demo", "--ai", "codex", "--no-git"])

    assert "CODEX_HOME" in console.file.getvalue()


def test_init_uses_saved_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    defaults = InitDefaults(ai="qwen", script="ps", no_git=True, source=tmp_path / ".pyspecify.yaml")
    app, console, _ = _build_app(defaults)

    _invoke(app, ["init", "demo"])

    assert (tmp_path / "demo" / ".qwen" / "commands" / "tasks.toml").is_file()
    assert (tmp_path / "demo" / ".specify" / "scripts" / "setup-plan.ps1").is_file()
    assert git_calls == []
    assert "Using defaults from" in console.file.getvalue()


def test_init_flags_override_saved_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    app, _, _ = _build_app(InitDefaults(ai="qwen", script="ps"))

    _invoke(app, ["init", "demo", "--ai", "claude", "--script", "sh"])

    assert (tmp_path / "demo" / ".claude" / "commands" / "tasks.md").is_file()
    assert not (tmp_path / "demo" / ".qwen").exists()


def test_init_invalid_settings_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    console = Console(file=io.StringIO(), force_terminal=False, width=200)
    app = Typer()

    @app.callback()
    def main() -> None:
        """Test entry point."""

    def broken_defaults() -> InitDefaults:
        raise SettingsError("Unknown assistant 'nope' in .pyspecify.yaml")

    register_init_command(app, console=console, show_banner=lambda: None, read_defaults=broken_defaults)

    _invoke(app, ["init", "demo"], expected_exit=1)

    assert "Invalid Settings" in console.file.getvalue()
    assert not (tmp_path / "demo").exists()


def test_init_interactive_chooser(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git_calls: list[Path]) -> None:
    monkeypatch.chdir(tmp_path)
    asked: list[str] = []

    def choose(options, prompt, default):
        asked.append(prompt)
        return "cursor" if "cursor" in options else "ps"

    app, _, _ = _build_app(choose=choose)

    _invoke(app, ["init", "demo"])

    assert len(asked) == 2
    assert (tmp_path / "demo" / ".cursor" / "commands" / "specify.md").is_file()
    assert (tmp_path / "demo" / ".specify" / "scripts" / "setup-plan.ps1").is_file()
