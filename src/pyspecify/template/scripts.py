"""Generate the project's helper scripts from the packaged script assets."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pyspecify.core.config import (
    SCRIPTS_DIR,
    SCRIPT_NAMES,
    SETUP_SCRIPT_NAME,
    AssistantProfile,
    ScriptTypeProfile,
)
from pyspecify.errors import (
    AssetNotFoundError,
    FileSystemError,
    ScriptGenerationError,
)
from pyspecify.template.assets import AssetStore
from pyspecify.template.substitution import substitute_script

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def script_asset_name(script_name: str, script_type: ScriptTypeProfile) -> str:
    """Bundle key for a script, e.g. ``bash/setup-plan.sh``.

    The bundle is laid out by descriptive directory (``bash``/``powershell``),
    never by the short CLI key (``sh``/``ps``).
    """
    return f"{script_type.directory}/{script_name}{script_type.extension}"


def script_reference(script_type: ScriptTypeProfile) -> str:
    if script_type.key == "ps":
        return f".\\{SETUP_SCRIPT_NAME}{script_type.extension}"
    return f"./{SETUP_SCRIPT_NAME}{script_type.extension}"


class ScriptGenerator:
    """Render scripts for one assistant / script type combination."""

    def __init__(self, assets: AssetStore, assistant: AssistantProfile, script_type: ScriptTypeProfile):
        self.assets = assets
        self.assistant = assistant
        self.script_type = script_type

    def output_name(self, script_name: str) -> str:
        return f"{script_name}{self.script_type.extension}"

    def generate(self, script_name: str) -> bytes:
        asset_name = script_asset_name(script_name, self.script_type)
        raw = self.assets.get_script(asset_name)
        if raw is None:
            raise AssetNotFoundError(f"script template {script_name} ({asset_name})")

        content = raw.decode("utf-8").replace("\r\n", "\n")
        content = substitute_script(content, self.assistant.key, script_reference(self.script_type))
        return content.encode("utf-8")

    def generate_all(self) -> dict[str, bytes]:
        """Return ``{output file name: content}`` for every known script."""
        generated: dict[str, bytes] = {}
        for script_name in SCRIPT_NAMES:
            try:
                generated[self.output_name(script_name)] = self.generate(script_name)
            except (AssetNotFoundError, UnicodeDecodeError) as exc:
                raise ScriptGenerationError(script_name, exc) from exc
        return generated

    def write_all(self, project_path: Path) -> list[Path]:
        """Write every script under ``.specify/scripts`` with the executable bit set."""
        scripts_dir = project_path / SCRIPTS_DIR
        written: list[Path] = []
        generated = self.generate_all()
        try:
            scripts_dir.mkdir(parents=True, exist_ok=True)
            for file_name, content in generated.items():
                target = scripts_dir / file_name
                target.write_bytes(content)
                if os.name != "nt":
                    os.chmod(target, EXECUTABLE_MODE)
                written.append(target)
        except OSError as exc:
            raise FileSystemError(f"failed to write scripts under {scripts_dir}", exc) from exc

        logger.debug("Wrote %d %s scripts to %s", len(written), self.script_type.key, scripts_dir)
        return written


__all__ = [
    "EXECUTABLE_MODE",
    "ScriptGenerator",
    "script_asset_name",
    "script_reference",
]
