"""Project request model and target-directory planning."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from pyspecify.errors import (
    ConflictingModeError,
    DirectoryExistsError,
    FileSystemError,
    MissingNameError,
    NonEmptyDirectoryError,
)

logger = logging.getLogger(__name__)


@dataclass
class ProjectConfig:
    """Options for one ``init`` invocation, filled in as the run progresses."""

    name: str | None = None
    here: bool = False
    ai_assistant: str = ""
    script_type: str = ""
    force: bool = False
    no_git: bool = False
    ignore_agent_tools: bool = False
    skip_tls: bool = False
    debug: bool = False
    github_token: str | None = None
    path: Path | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        # '.' is shorthand for --here; '. --here' is left for validation to reject
        if self.name == "." and not self.here:
            self.here = True
            self.name = None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return self.path.name if self.path else ""


class ProjectLayoutPlanner:
    """Validate where a project goes and create its root directory.

    ``--force`` only relaxes the non-empty check for in-place initialization;
    creating a new directory never overwrites an existing path.
    """

    def __init__(self, cwd: Callable[[], Path] = Path.cwd):
        self._cwd = cwd

    def validate_mode(self, config: ProjectConfig) -> None:
        if config.here and config.name:
            raise ConflictingModeError(config.name)
        if not config.here and not config.name:
            raise MissingNameError()

    def resolve(self, config: ProjectConfig) -> Path:
        """Return the absolute project root without touching the file system."""
        self.validate_mode(config)
        try:
            cwd = self._cwd()
        except OSError as exc:
            raise FileSystemError("failed to get current directory", exc) from exc

        if config.here:
            return cwd.resolve()
        return (cwd / config.name).resolve()

    def check(self, config: ProjectConfig, root: Path) -> None:
        if config.here:
            try:
                entries = list(root.iterdir())
            except OSError as exc:
                raise FileSystemError(f"failed to read directory {root}", exc) from exc
            if entries and not config.force:
                raise NonEmptyDirectoryError(root, len(entries))
            if entries:
                logger.info("Initializing non-empty directory %s (%d items) with --force", root, len(entries))
        elif root.exists():
            raise DirectoryExistsError(root)

    def prepare(self, config: ProjectConfig) -> Path:
        """Validate preconditions, create the root if needed and record it on *config*."""
        root = self.resolve(config)
        self.check(config, root)
        if not config.here:
            try:
                root.mkdir(parents=True)
            except OSError as exc:
                raise FileSystemError(f"failed to create project directory {root}", exc) from exc
            logger.debug("Created project directory %s", root)
        config.path = root
        return root


__all__ = ["ProjectConfig", "ProjectLayoutPlanner"]
