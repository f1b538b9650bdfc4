"""External tool probing and git repository setup."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from pyspecify.core.config import CLAUDE_LOCAL_PATH
from pyspecify.errors import VersionControlError

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit from Specify template"


def check_tool(tool: str) -> bool:
    """Return True when *tool* is available on PATH."""
    # `claude migrate-installer` removes claude from PATH and leaves
    # ~/.claude/local/claude behind instead.
    if tool == "claude" and CLAUDE_LOCAL_PATH.is_file():
        return True
    return shutil.which(tool) is not None


def has_git_marker(path: Path) -> bool:
    return (path / ".git").exists()


def init_git_repo(project_path: Path) -> None:
    """Run ``git init``, ``git add .`` and an initial commit in *project_path*."""
    commands = (
        (["git", "init"], "failed to initialize git repository"),
        (["git", "add", "."], "failed to add files to git"),
        (["git", "commit", "-m", INITIAL_COMMIT_MESSAGE], "failed to create initial commit"),
    )
    for cmd, message in commands:
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, cwd=project_path)
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip()
            logger.debug("%s failed (%s): %s", " ".join(cmd), exc.returncode, detail)
            raise VersionControlError(message, exc) from exc
        except FileNotFoundError as exc:
            raise VersionControlError("git executable not found", exc) from exc
    logger.info("Initialized git repository at %s", project_path)


__all__ = [
    "INITIAL_COMMIT_MESSAGE",
    "check_tool",
    "has_git_marker",
    "init_git_repo",
]
