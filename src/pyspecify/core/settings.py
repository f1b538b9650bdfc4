"""User defaults for ``init`` read from YAML.

Lookup order (first file found wins):

1. ``./.pyspecify.yaml`` in the working directory
2. ``<user config dir>/pyspecify/config.yaml`` (via platformdirs)

Example::

    ai: claude
    script: sh
    no_git: false
    ignore_agent_tools: false

Command-line flags always override these values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from pyspecify.core.config import AI_ASSISTANTS, SETTINGS_FILE, get_script_type
from pyspecify.errors import ConfigurationError, SettingsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitDefaults:
    ai: str = ""
    script: str = ""
    no_git: bool = False
    ignore_agent_tools: bool = False
    source: Path | None = None


def settings_candidates(cwd: Path | None = None) -> list[Path]:
    cwd = cwd or Path.cwd()
    return [
        cwd / SETTINGS_FILE,
        Path(user_config_dir("pyspecify")) / "config.yaml",
    ]


def _as_bool(data: dict, key: str, source: Path) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise SettingsError(f"Invalid '{key}' in {source}: expected true or false")
    return value


def load_defaults(candidates: list[Path] | None = None) -> InitDefaults:
    """Load the first defaults file that exists, or return empty defaults."""
    for path in candidates if candidates is not None else settings_candidates():
        if not path.is_file():
            continue

        yaml = YAML(typ="safe")
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.load(handle) or {}
        except (OSError, YAMLError) as exc:
            raise SettingsError(f"Failed to parse {path}", exc) from exc

        if not isinstance(data, dict):
            raise SettingsError(f"Invalid settings in {path}: expected a mapping")

        ai = str(data.get("ai") or "").strip().lower()
        if ai and ai not in AI_ASSISTANTS:
            raise SettingsError(
                f"Unknown assistant '{ai}' in {path}. Valid assistants: {', '.join(AI_ASSISTANTS)}"
            )

        script = str(data.get("script") or "").strip().lower()
        if script:
            try:
                script = get_script_type(script).key
            except ConfigurationError as exc:
                raise SettingsError(f"Invalid 'script' in {path}", exc) from exc

        logger.debug("Loaded init defaults from %s", path)
        return InitDefaults(
            ai=ai,
            script=script,
            no_git=_as_bool(data, "no_git", path),
            ignore_agent_tools=_as_bool(data, "ignore_agent_tools", path),
            source=path,
        )

    return InitDefaults()


__all__ = ["InitDefaults", "load_defaults", "settings_candidates"]
