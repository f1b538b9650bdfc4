"""CLI command modules for pyspecify."""

from .check import register_check_command
from .init import register_init_command
from .version import register_version_command

__all__ = [
    "register_check_command",
    "register_init_command",
    "register_version_command",
]
