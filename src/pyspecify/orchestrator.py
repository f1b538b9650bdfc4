"""Drive a project initialization through its ordered steps.

Steps run strictly in sequence and each one reaches a terminal status before
the next starts. The first failing step aborts the run: its typed error is
recorded on the tracker and re-raised to the caller unchanged. Files written
before the failure are left in place.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Protocol

from pyspecify.cli.ui import StepTracker
from pyspecify.core.config import (
    AI_CHOICES,
    DEFAULT_ASSISTANT,
    SCRIPT_TYPE_CHOICES,
    AssistantProfile,
    ScriptTypeProfile,
    default_script_type_key,
    get_assistant,
    get_script_type,
)
from pyspecify.core.project import ProjectConfig, ProjectLayoutPlanner
from pyspecify.core.tools import check_tool, has_git_marker, init_git_repo
from pyspecify.errors import FileSystemError, SpecifyError, ToolNotFoundError
from pyspecify.template.assets import AssetStore
from pyspecify.template.processor import TemplateProcessor
from pyspecify.template.scripts import ScriptGenerator

logger = logging.getLogger(__name__)

INIT_STEPS: tuple[tuple[str, str], ...] = (
    ("validate", "Validate configuration"),
    ("assistant", "Select AI assistant"),
    ("script", "Select script type"),
    ("tools", "Check required tools"),
    ("directory", "Prepare project directory"),
    ("templates", "Process templates"),
    ("scripts", "Generate scripts"),
    ("git", "Initialize git repository"),
)


class SelectionStrategy(Protocol):
    def select(self, prompt: str, options: Mapping[str, str], default: str) -> str:
        ...


class FlagSelection:
    """Use a value supplied on the command line (validated by the caller)."""

    def __init__(self, value: str):
        self.value = value

    def select(self, prompt: str, options: Mapping[str, str], default: str) -> str:
        return self.value


class InteractiveSelection:
    """Ask an external chooser, e.g. the arrow-key selector."""

    def __init__(self, chooser: Callable[[Mapping[str, str], str, str], str]):
        self.chooser = chooser

    def select(self, prompt: str, options: Mapping[str, str], default: str) -> str:
        return self.chooser(options, prompt, default)


@dataclass(frozen=True)
class Skipped:
    detail: str


@dataclass
class InitResult:
    project_path: Path
    assistant: AssistantProfile
    script_type: ScriptTypeProfile
    template_files: list[Path] = field(default_factory=list)
    script_files: list[Path] = field(default_factory=list)
    git_status: str = ""
    warnings: list[str] = field(default_factory=list)


def new_tracker(title: str = "Initialize Specify Project") -> StepTracker:
    tracker = StepTracker(title)
    for key, label in INIT_STEPS:
        tracker.add(key, label)
    return tracker


class InitializationOrchestrator:
    def __init__(
        self,
        config: ProjectConfig,
        *,
        tracker: StepTracker | None = None,
        planner: ProjectLayoutPlanner | None = None,
        assistant_selection: SelectionStrategy | None = None,
        script_selection: SelectionStrategy | None = None,
        load_assets: Callable[[], AssetStore] = AssetStore.load,
        tool_checker: Callable[[str], bool] = check_tool,
        git_initializer: Callable[[Path], None] = init_git_repo,
        warn: Callable[[str], None] | None = None,
    ):
        self.config = config
        self.tracker = tracker or new_tracker()
        self.planner = planner or ProjectLayoutPlanner()
        self.assistant_selection = assistant_selection or FlagSelection(config.ai_assistant or DEFAULT_ASSISTANT)
        self.script_selection = script_selection or FlagSelection(
            config.script_type or default_script_type_key(os.name)
        )
        self._load_assets = load_assets
        self._tool_checker = tool_checker
        self._git_initializer = git_initializer
        self._warn = warn
        self._assets: AssetStore | None = None
        self._git_available = False
        self.warnings: list[str] = []
        self.assistant: AssistantProfile | None = None
        self.script_type: ScriptTypeProfile | None = None
        self.result: InitResult | None = None
        for key, label in INIT_STEPS:
            self.tracker.add(key, label)

    def run(self) -> InitResult:
        self._run_step("validate", self._validate)
        self._run_step("assistant", self._select_assistant)
        self._run_step("script", self._select_script_type)
        self._run_step("tools", self._check_tools)
        self._run_step("directory", self._prepare_directory)
        self._run_step("templates", self._materialize_templates)
        self._run_step("scripts", self._materialize_scripts)
        self._run_step("git", self._initialize_git)
        assert self.result is not None
        return self.result

    def _run_step(self, key: str, action: Callable[[], str | Skipped]) -> None:
        self.tracker.start(key)
        try:
            outcome = action()
        except SpecifyError as exc:
            self.tracker.error(key, str(exc))
            logger.debug("Step %s failed", key, exc_info=True)
            raise
        except OSError as exc:
            error = FileSystemError(f"step '{key}' failed", exc)
            self.tracker.error(key, str(error))
            raise error from exc

        if isinstance(outcome, Skipped):
            self.tracker.skip(key, outcome.detail)
        else:
            self.tracker.complete(key, outcome)

    def _validate(self) -> str:
        root = self.planner.resolve(self.config)
        if not self.config.here:
            self.planner.check(self.config, root)
        self.config.path = root
        return "configuration valid"

    def _select_assistant(self) -> str:
        key = self.assistant_selection.select("Choose your AI assistant:", AI_CHOICES, DEFAULT_ASSISTANT)
        self.assistant = get_assistant(key)
        self.config.ai_assistant = self.assistant.key
        return self.assistant.name

    def _select_script_type(self) -> str:
        key = self.script_selection.select(
            "Choose script type (or press Enter)",
            SCRIPT_TYPE_CHOICES,
            default_script_type_key(os.name),
        )
        self.script_type = get_script_type(key)
        self.config.script_type = self.script_type.key
        return self.script_type.key

    def _check_tools(self) -> str:
        assert self.assistant is not None
        notes: list[str] = []

        if not self.config.no_git:
            self._git_available = self._tool_checker("git")
            if not self._git_available:
                self._warning("git not found - repository initialization will be skipped")
                notes.append("git missing")

        tool = self.assistant.cli_tool
        if tool and not self.config.ignore_agent_tools:
            if not self._tool_checker(tool):
                raise ToolNotFoundError(tool, self.assistant.website)
            notes.append(f"{tool} available")
        elif tool:
            notes.append(f"{tool} check skipped")

        return ", ".join(notes) or "ok"

    def _warning(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)
        if self._warn is not None:
            self._warn(message)

    def _prepare_directory(self) -> str:
        assert self.assistant is not None and self.script_type is not None
        root = self.planner.prepare(self.config)
        self.result = InitResult(
            project_path=root,
            assistant=self.assistant,
            script_type=self.script_type,
            warnings=self.warnings,
        )
        return str(root)

    def _assets_store(self) -> AssetStore:
        if self._assets is None:
            self._assets = self._load_assets()
        return self._assets

    def _materialize_templates(self) -> str:
        assert self.result is not None
        processor = TemplateProcessor(self._assets_store(), self.result.assistant, self.result.script_type)
        self.result.template_files = processor.write_all(self.result.project_path)
        return f"{len(self.result.template_files)} files"

    def _materialize_scripts(self) -> str:
        assert self.result is not None
        generator = ScriptGenerator(self._assets_store(), self.result.assistant, self.result.script_type)
        self.result.script_files = generator.write_all(self.result.project_path)
        return f"{len(self.result.script_files)} {self.result.script_type.key} scripts"

    def _initialize_git(self) -> str | Skipped:
        assert self.result is not None
        if self.config.no_git:
            self.result.git_status = "skipped"
            return Skipped("--no-git flag")
        if has_git_marker(self.result.project_path):
            self.result.git_status = "existing"
            return "existing repository detected"
        if not self._git_available:
            self.result.git_status = "unavailable"
            return Skipped("git not available")
        self._git_initializer(self.result.project_path)
        self.result.git_status = "initialized"
        return "initialized"


__all__ = [
    "FlagSelection",
    "INIT_STEPS",
    "InitResult",
    "InitializationOrchestrator",
    "InteractiveSelection",
    "SelectionStrategy",
    "Skipped",
    "new_tracker",
]
