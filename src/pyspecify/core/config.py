"""Static registries and constants: assistants, script types, branding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pyspecify.errors import UnknownAssistantError, UnknownScriptTypeError

VERSION = "0.1.0"
COMMIT = "dev"
BUILD_DATE = "2025-01-01T00:00:00Z"
USER_AGENT = f"pyspecify/{VERSION}"

GITHUB_API = "https://api.github.com"
GITHUB_OWNER = "github"
GITHUB_REPO = "spec-kit"

SPECIFY_DIR = ".specify"
TEMPLATES_DIR = f"{SPECIFY_DIR}/templates"
SCRIPTS_DIR = f"{SPECIFY_DIR}/scripts"
COMMANDS_PREFIX = "commands/"
SETUP_SCRIPT_NAME = "setup"
SETTINGS_FILE = ".pyspecify.yaml"

SCRIPT_NAMES: tuple[str, ...] = (
    "check-prerequisites",
    "create-new-feature",
    "setup-plan",
    "update-agent-context",
    SETUP_SCRIPT_NAME,
)

CLAUDE_LOCAL_PATH = Path.home() / ".claude" / "local" / "claude"
GIT_DOWNLOAD_URL = "https://git-scm.com/downloads"


class FileFormat(str, Enum):
    """Command-file format an assistant consumes; value is the file extension."""

    MARKDOWN = "md"
    TOML = "toml"
    PROMPT = "prompt.md"


@dataclass(frozen=True)
class AssistantProfile:
    key: str
    name: str
    directory: str
    file_format: FileFormat
    arg_format: str
    cli_tool: str = ""
    is_ide_based: bool = False
    website: str = ""

    @property
    def folder(self) -> str:
        """Top-level folder the assistant keeps its state in (e.g. ``.claude/``)."""
        return self.directory.split("/", 1)[0] + "/"


@dataclass(frozen=True)
class ScriptTypeProfile:
    key: str
    name: str
    extension: str
    platform: str
    directory: str


AI_ASSISTANTS: dict[str, AssistantProfile] = {
    "copilot": AssistantProfile(
        key="copilot",
        name="GitHub Copilot",
        directory=".github/prompts/",
        file_format=FileFormat.PROMPT,
        arg_format="$ARGUMENTS",
        is_ide_based=True,
        website="https://github.com/features/copilot",
    ),
    "claude": AssistantProfile(
        key="claude",
        name="Claude Code",
        directory=".claude/commands/",
        file_format=FileFormat.MARKDOWN,
        arg_format="$ARGUMENTS",
        cli_tool="claude",
        website="https://docs.anthropic.com/en/docs/claude-code/setup",
    ),
    "gemini": AssistantProfile(
        key="gemini",
        name="Gemini CLI",
        directory=".gemini/commands/",
        file_format=FileFormat.TOML,
        arg_format="{{args}}",
        cli_tool="gemini",
        website="https://github.com/google-gemini/gemini-cli",
    ),
    "cursor": AssistantProfile(
        key="cursor",
        name="Cursor",
        directory=".cursor/commands/",
        file_format=FileFormat.MARKDOWN,
        arg_format="$ARGUMENTS",
        cli_tool="cursor-agent",
        website="https://cursor.sh/",
    ),
    "qwen": AssistantProfile(
        key="qwen",
        name="Qwen Code",
        directory=".qwen/commands/",
        file_format=FileFormat.TOML,
        arg_format="{{args}}",
        cli_tool="qwen",
        website="https://github.com/QwenLM/qwen-code",
    ),
    "opencode": AssistantProfile(
        key="opencode",
        name="opencode",
        directory=".opencode/command/",
        file_format=FileFormat.MARKDOWN,
        arg_format="$ARGUMENTS",
        cli_tool="opencode",
        website="https://opencode.ai",
    ),
    "codex": AssistantProfile(
        key="codex",
        name="Codex CLI",
        directory=".codex/prompts/",
        file_format=FileFormat.MARKDOWN,
        arg_format="$ARGUMENTS",
        cli_tool="codex",
        website="https://github.com/openai/codex",
    ),
    "windsurf": AssistantProfile(
        key="windsurf",
        name="Windsurf",
        directory=".windsurf/workflows/",
        file_format=FileFormat.MARKDOWN,
        arg_format="$ARGUMENTS",
        is_ide_based=True,
        website="https://codeium.com/windsurf",
    ),
    "kilocode": AssistantProfile(
        key="kilocode",
        name="Kilo Code",
        directory=".kilocode/workflows/",
        file_format=FileFormat.MARKDOWN,
        arg_format="$ARGUMENTS",
        is_ide_based=True,
        website="https://kilocode.ai/",
    ),
    "auggie": AssistantProfile(
        key="auggie",
        name="Auggie CLI",
        directory=".augment/commands/",
        file_format=FileFormat.MARKDOWN,
        arg_format="$ARGUMENTS",
        cli_tool="auggie",
        website="https://docs.augmentcode.com/cli/setup-auggie/install-auggie-cli",
    ),
    "roo": AssistantProfile(
        key="roo",
        name="Roo Code",
        directory=".roo/commands/",
        file_format=FileFormat.MARKDOWN,
        arg_format="$ARGUMENTS",
        is_ide_based=True,
        website="https://roocode.com/",
    ),
}

AI_CHOICES: dict[str, str] = {key: profile.name for key, profile in AI_ASSISTANTS.items()}

DEFAULT_ASSISTANT = "claude"

SCRIPT_TYPES: dict[str, ScriptTypeProfile] = {
    "sh": ScriptTypeProfile(
        key="sh",
        name="POSIX Shell (bash/zsh)",
        extension=".sh",
        platform="unix",
        directory="bash",
    ),
    "ps": ScriptTypeProfile(
        key="ps",
        name="PowerShell",
        extension=".ps1",
        platform="windows",
        directory="powershell",
    ),
}

SCRIPT_TYPE_ALIASES: dict[str, str] = {
    "posix": "sh",
    "bash": "sh",
    "powershell": "ps",
    "pwsh": "ps",
}

SCRIPT_TYPE_CHOICES: dict[str, str] = {key: profile.name for key, profile in SCRIPT_TYPES.items()}


def get_assistant(key: str) -> AssistantProfile:
    normalized = key.strip().lower()
    try:
        return AI_ASSISTANTS[normalized]
    except KeyError:
        raise UnknownAssistantError(key, list(AI_ASSISTANTS)) from None


def get_script_type(key: str) -> ScriptTypeProfile:
    """Look up a script type by short key, accepting descriptive aliases."""
    normalized = key.strip().lower()
    normalized = SCRIPT_TYPE_ALIASES.get(normalized, normalized)
    try:
        return SCRIPT_TYPES[normalized]
    except KeyError:
        raise UnknownScriptTypeError(key, list(SCRIPT_TYPES)) from None


def default_script_type_key(os_name: str) -> str:
    return "ps" if os_name == "nt" else "sh"


BANNER = """
███████╗██████╗ ███████╗ ██████╗██╗███████╗██╗   ██╗
██╔════╝██╔══██╗██╔════╝██╔════╝██║██╔════╝╚██╗ ██╔╝
███████╗██████╔╝█████╗  ██║     ██║█████╗   ╚████╔╝
╚════██║██╔═══╝ ██╔══╝  ██║     ██║██╔══╝    ╚██╔╝
███████║██║     ███████╗╚██████╗██║██║        ██║
╚══════╝╚═╝     ╚══════╝ ╚═════╝╚═╝╚═╝        ╚═╝
"""

TAGLINE = "GitHub Spec Kit - Spec-Driven Development Toolkit"

BANNER_COLORS = ("bright_blue", "blue", "cyan", "bright_cyan", "white", "bright_white")

SLASH_COMMANDS: tuple[tuple[str, str], ...] = (
    ("constitution", "Establish project principles"),
    ("specify", "Create baseline specification"),
    ("clarify", "Ask structured questions to de-risk ambiguous areas"),
    ("plan", "Create implementation plan"),
    ("tasks", "Break down work into tasks"),
    ("analyze", "Cross-artifact consistency report"),
    ("implement", "Execute implementation"),
)

__all__ = [
    "AI_ASSISTANTS",
    "AI_CHOICES",
    "AssistantProfile",
    "BANNER",
    "BANNER_COLORS",
    "BUILD_DATE",
    "COMMANDS_PREFIX",
    "COMMIT",
    "DEFAULT_ASSISTANT",
    "FileFormat",
    "SCRIPTS_DIR",
    "SCRIPT_NAMES",
    "SCRIPT_TYPES",
    "SCRIPT_TYPE_ALIASES",
    "SCRIPT_TYPE_CHOICES",
    "SETUP_SCRIPT_NAME",
    "SLASH_COMMANDS",
    "SPECIFY_DIR",
    "ScriptTypeProfile",
    "TAGLINE",
    "TEMPLATES_DIR",
    "VERSION",
    "default_script_type_key",
    "get_assistant",
    "get_script_type",
]
