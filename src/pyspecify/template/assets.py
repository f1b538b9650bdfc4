"""Packaged template and script assets.

The bundle lives under ``pyspecify/assets`` and is split into two
categories::

    assets/templates/<relative path>     e.g. commands/specify.md
    assets/scripts/<variant>/<file>      e.g. bash/setup-plan.sh

Everything is read into memory once; the store is read-only afterwards.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from pyspecify.errors import AssetLoadError, AssetNotFoundError

logger = logging.getLogger(__name__)

ASSETS_ROOT_ENV = "PYSPECIFY_ASSETS_ROOT"

TEMPLATE_CATEGORY = "templates"
SCRIPT_CATEGORY = "scripts"


@dataclass(frozen=True)
class AssetKey:
    """Two-level asset identifier: category, namespace bucket and file name."""

    category: str
    namespace: str
    name: str

    @property
    def relative(self) -> str:
        """Path inside the category, e.g. ``commands/specify.md``."""
        return f"{self.namespace}/{self.name}" if self.namespace else self.name

    @property
    def path(self) -> str:
        return f"{self.category}/{self.relative}"

    @classmethod
    def parse(cls, path: str) -> "AssetKey":
        category, _, rest = path.strip("/").partition("/")
        namespace, _, name = rest.rpartition("/")
        return cls(category=category, namespace=namespace, name=name)


def _walk(resource: Traversable, prefix: str = "") -> Iterator[tuple[str, Traversable]]:
    for child in sorted(resource.iterdir(), key=lambda item: item.name):
        rel = f"{prefix}{child.name}"
        if child.is_dir():
            yield from _walk(child, rel + "/")
        elif child.is_file():
            yield rel, child


def default_assets_root() -> Traversable:
    """Return the asset bundle root, honouring ``PYSPECIFY_ASSETS_ROOT``."""
    if env_root := os.environ.get(ASSETS_ROOT_ENV):
        return Path(env_root).expanduser().resolve()
    return files("pyspecify").joinpath("assets")


class AssetStore:
    """In-memory mapping of asset paths to raw bytes."""

    def __init__(self, templates: Mapping[str, bytes], scripts: Mapping[str, bytes]):
        self._templates = MappingProxyType(dict(templates))
        self._scripts = MappingProxyType(dict(scripts))

    @classmethod
    def load(cls, root: Traversable | Path | None = None) -> "AssetStore":
        root = root if root is not None else default_assets_root()
        templates_root = root.joinpath(TEMPLATE_CATEGORY)
        scripts_root = root.joinpath(SCRIPT_CATEGORY)
        if not templates_root.is_dir() or not scripts_root.is_dir():
            raise AssetLoadError(f"asset bundle not found at {root}")

        try:
            templates = {rel: item.read_bytes() for rel, item in _walk(templates_root)}
            scripts = {rel: item.read_bytes() for rel, item in _walk(scripts_root)}
        except OSError as exc:
            raise AssetLoadError(f"asset bundle at {root} is unreadable", exc) from exc

        logger.debug("Loaded %d templates and %d scripts from %s", len(templates), len(scripts), root)
        return cls(templates, scripts)

    @property
    def templates(self) -> Mapping[str, bytes]:
        return self._templates

    @property
    def scripts(self) -> Mapping[str, bytes]:
        return self._scripts

    def get(self, key: str) -> bytes | None:
        """Look up a full key such as ``templates/commands/plan.md``."""
        asset_key = AssetKey.parse(key)
        if asset_key.category == TEMPLATE_CATEGORY:
            return self._templates.get(asset_key.relative)
        if asset_key.category == SCRIPT_CATEGORY:
            return self._scripts.get(asset_key.relative)
        return None

    def get_template(self, name: str) -> bytes | None:
        return self._templates.get(name)

    def get_script(self, name: str) -> bytes | None:
        return self._scripts.get(name)

    def require_template(self, name: str) -> bytes:
        content = self._templates.get(name)
        if content is None:
            raise AssetNotFoundError(f"template {name}")
        return content

    def require_script(self, name: str) -> bytes:
        content = self._scripts.get(name)
        if content is None:
            raise AssetNotFoundError(f"script template {name}")
        return content

    def list_by_prefix(self, prefix: str) -> list[str]:
        """Return full keys starting with *prefix*, sorted."""
        keys = [f"{TEMPLATE_CATEGORY}/{name}" for name in self._templates]
        keys += [f"{SCRIPT_CATEGORY}/{name}" for name in self._scripts]
        return sorted(key for key in keys if key.startswith(prefix))

    def list_templates(self) -> list[str]:
        return sorted(self._templates)

    def list_scripts(self) -> list[str]:
        return sorted(self._scripts)


__all__ = [
    "ASSETS_ROOT_ENV",
    "AssetKey",
    "AssetStore",
    "default_assets_root",
]
