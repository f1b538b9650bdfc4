from __future__ import annotations

from pathlib import Path

import pytest

from pyspecify.core.settings import InitDefaults, load_defaults, settings_candidates
from pyspecify.errors import ConfigurationError, SettingsError


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_files_give_empty_defaults(tmp_path: Path) -> None:
    assert load_defaults([tmp_path / "a.yaml", tmp_path / "b.yaml"]) == InitDefaults()


def test_first_existing_file_wins(tmp_path: Path) -> None:
    first = _write(tmp_path / "first.yaml", "ai: gemini\nscript: posix\nno_git: true\n")
    second = _write(tmp_path / "second.yaml", "ai: claude\n")

    defaults = load_defaults([first, second])

    assert defaults.ai == "gemini"
    assert defaults.script == "sh"
    assert defaults.no_git is True
    assert defaults.ignore_agent_tools is False
    assert defaults.source == first


def test_empty_file_is_allowed(tmp_path: Path) -> None:
    path = _write(tmp_path / "empty.yaml", "")

    assert load_defaults([path]).source == path


@pytest.mark.parametrize(
    "text",
    [
        "ai: nope\n",
        "script: fish\n",
        "no_git: sometimes\n",
        "- just\n- a list\n",
        "ai: [unclosed\n",
    ],
)
def test_invalid_settings_raise(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path / "bad.yaml", text)

    with pytest.raises(SettingsError) as excinfo:
        load_defaults([path])

    assert isinstance(excinfo.value, ConfigurationError)
    assert str(path) in str(excinfo.value)


def test_candidates_start_with_working_directory(tmp_path: Path) -> None:
    candidates = settings_candidates(tmp_path)

    assert candidates[0] == tmp_path / ".pyspecify.yaml"
    assert candidates[1].name == "config.yaml"
