"""Template and script materialization for pyspecify."""

from .assets import AssetKey, AssetStore, default_assets_root
from .processor import (
    TemplateProcessor,
    command_filename,
    setup_script_path,
    to_toml_command,
)
from .scripts import ScriptGenerator, script_asset_name, script_reference
from .substitution import (
    leftover_placeholders,
    replace_arguments_in_prompt_block,
    substitute,
    substitute_script,
)

__all__ = [
    "AssetKey",
    "AssetStore",
    "ScriptGenerator",
    "TemplateProcessor",
    "command_filename",
    "default_assets_root",
    "leftover_placeholders",
    "replace_arguments_in_prompt_block",
    "script_asset_name",
    "script_reference",
    "setup_script_path",
    "substitute",
    "substitute_script",
    "to_toml_command",
]
