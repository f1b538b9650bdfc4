"""Exception hierarchy for pyspecify.

Every failure the core can produce is a :class:`SpecifyError` carrying a
stable ``code`` so the CLI can report it uniformly and exit non-zero.
"""

from __future__ import annotations

ERR_INVALID_CONFIG = "INVALID_CONFIG"
ERR_VALIDATION = "VALIDATION_ERROR"
ERR_TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
ERR_ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
ERR_TEMPLATE = "TEMPLATE_ERROR"
ERR_SCRIPT = "SCRIPT_ERROR"
ERR_FILESYSTEM = "FILESYSTEM_ERROR"
ERR_GIT = "GIT_ERROR"
ERR_GITHUB_API = "GITHUB_API_ERROR"


class SpecifyError(Exception):
    """Base exception for pyspecify errors."""

    code = ERR_VALIDATION

    def __init__(self, message: str, cause: BaseException | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class ConfigurationError(SpecifyError):
    """Mutually exclusive or missing CLI inputs."""

    code = ERR_INVALID_CONFIG


class ConflictingModeError(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot specify both project name '{name}' and --here flag")


class MissingNameError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Must specify either a project name, use '.' for current directory, or use --here flag")


class UnknownAssistantError(ConfigurationError):
    def __init__(self, key: str, valid: list[str]):
        self.key = key
        super().__init__(f"Unknown AI assistant: {key}. Choose from: {', '.join(valid)}")


class UnknownScriptTypeError(ConfigurationError):
    def __init__(self, key: str, valid: list[str]):
        self.key = key
        super().__init__(f"Unknown script type: {key}. Choose from: {', '.join(valid)}")


class SelectionCancelledError(ConfigurationError):
    """Interactive selection was aborted by the user."""


class SettingsError(ConfigurationError):
    """A defaults file could not be parsed or holds invalid values."""


class DirectoryStateError(SpecifyError):
    """Target directory violates the mode-specific precondition."""

    code = ERR_VALIDATION

    def __init__(self, message: str, path: object = None):
        self.path = path
        super().__init__(message)


class DirectoryExistsError(DirectoryStateError):
    def __init__(self, path: object):
        super().__init__(f"Directory {path} already exists", path)


class NonEmptyDirectoryError(DirectoryStateError):
    def __init__(self, path: object, entries: int):
        self.entries = entries
        super().__init__(
            f"Directory {path} is not empty ({entries} items); use --force to override",
            path,
        )


class ToolNotFoundError(SpecifyError):
    code = ERR_TOOL_NOT_FOUND

    def __init__(self, tool: str, install_hint: str = ""):
        self.tool = tool
        self.install_hint = install_hint
        super().__init__(f"required tool not found: {tool}")


class AssetLoadError(SpecifyError):
    """The packaged asset bundle is missing or unreadable."""

    code = ERR_ASSET_NOT_FOUND


class AssetNotFoundError(SpecifyError):
    code = ERR_ASSET_NOT_FOUND

    def __init__(self, asset_name: str):
        self.asset_name = asset_name
        super().__init__(f"asset not found: {asset_name}")


class TemplateProcessingError(SpecifyError):
    code = ERR_TEMPLATE

    def __init__(self, template_name: str, cause: BaseException | None = None):
        self.template_name = template_name
        super().__init__(f"failed to process template {template_name}", cause)


class ScriptGenerationError(SpecifyError):
    code = ERR_SCRIPT

    def __init__(self, script_name: str, cause: BaseException | None = None):
        self.script_name = script_name
        super().__init__(f"failed to generate script {script_name}", cause)


class FileSystemError(SpecifyError):
    code = ERR_FILESYSTEM


class VersionControlError(SpecifyError):
    code = ERR_GIT


class GitHubAPIError(SpecifyError):
    code = ERR_GITHUB_API


__all__ = [
    "AssetLoadError",
    "AssetNotFoundError",
    "ConfigurationError",
    "ConflictingModeError",
    "DirectoryExistsError",
    "DirectoryStateError",
    "FileSystemError",
    "GitHubAPIError",
    "MissingNameError",
    "NonEmptyDirectoryError",
    "ScriptGenerationError",
    "SelectionCancelledError",
    "SettingsError",
    "SpecifyError",
    "TemplateProcessingError",
    "ToolNotFoundError",
    "UnknownAssistantError",
    "UnknownScriptTypeError",
    "VersionControlError",
]
