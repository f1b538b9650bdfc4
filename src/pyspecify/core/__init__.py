"""Core configuration, project planning and tool helpers."""

from .config import (
    AI_ASSISTANTS,
    AI_CHOICES,
    BANNER,
    SCRIPT_TYPES,
    SCRIPT_TYPE_CHOICES,
    AssistantProfile,
    FileFormat,
    ScriptTypeProfile,
    get_assistant,
    get_script_type,
)
from .project import ProjectConfig, ProjectLayoutPlanner
from .tools import check_tool, has_git_marker, init_git_repo

__all__ = [
    "AI_ASSISTANTS",
    "AI_CHOICES",
    "AssistantProfile",
    "BANNER",
    "FileFormat",
    "ProjectConfig",
    "ProjectLayoutPlanner",
    "SCRIPT_TYPES",
    "SCRIPT_TYPE_CHOICES",
    "ScriptTypeProfile",
    "check_tool",
    "get_assistant",
    "get_script_type",
    "has_git_marker",
    "init_git_repo",
]
