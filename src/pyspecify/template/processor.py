"""Render packaged templates for an assistant and place them in a project."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from pyspecify.core.config import (
    COMMANDS_PREFIX,
    SCRIPTS_DIR,
    SETUP_SCRIPT_NAME,
    TEMPLATES_DIR,
    AssistantProfile,
    FileFormat,
    ScriptTypeProfile,
)
from pyspecify.errors import (
    AssetNotFoundError,
    FileSystemError,
    TemplateProcessingError,
)
from pyspecify.template.assets import AssetStore
from pyspecify.template.substitution import substitute

logger = logging.getLogger(__name__)


def setup_script_path(script_type: ScriptTypeProfile) -> str:
    """Project-relative path templates use for ``{SCRIPT}``."""
    return f"{SCRIPTS_DIR}/{SETUP_SCRIPT_NAME}{script_type.extension}"


def command_filename(template_name: str, file_format: FileFormat) -> str:
    """Derive an assistant command file name from a template name.

    ``specify.md`` becomes ``specify.md``, ``specify.toml`` or
    ``specify.prompt.md`` depending on the assistant's format.
    """
    stem = PurePosixPath(template_name).name
    if stem.endswith(".md"):
        stem = stem[: -len(".md")]
    return f"{stem}.{file_format.value}"


def split_frontmatter(text: str) -> tuple[str, str]:
    """Return ``(frontmatter, body)``; frontmatter excludes the ``---`` fences."""
    if text.startswith("---\n"):
        closing = text.find("\n---\n", 4)
        if closing != -1:
            return text[4:closing], text[closing + 5:]
    return "", text


def _frontmatter_description(frontmatter: str) -> str:
    for line in frontmatter.splitlines():
        stripped = line.strip()
        if stripped.startswith("description:"):
            value = stripped[len("description:"):].strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                value = value[1:-1]
            return value
    return ""


def to_toml_command(text: str) -> str:
    """Wrap a Markdown command template into a TOML command document."""
    frontmatter, body = split_frontmatter(text)
    description = _frontmatter_description(frontmatter).replace("\\", "\\\\").replace('"', '\\"')
    body = body.lstrip("\n")
    if not body.endswith("\n"):
        body += "\n"
    return f'description = "{description}"\n\nprompt = """\n{body}"""\n'


class TemplateProcessor:
    """Turn the packaged templates into project files for one assistant."""

    def __init__(self, assets: AssetStore, assistant: AssistantProfile, script_type: ScriptTypeProfile):
        self.assets = assets
        self.assistant = assistant
        self.script_type = script_type

    def is_command(self, template_name: str) -> bool:
        return template_name.startswith(COMMANDS_PREFIX)

    def process_template(self, template_name: str) -> bytes:
        raw = self.assets.get_template(template_name)
        if raw is None:
            raise AssetNotFoundError(f"template {template_name}")

        content = raw.decode("utf-8").replace("\r\n", "\n")
        content = self._format(template_name, content)
        content = substitute(content, self.assistant, setup_script_path(self.script_type))
        return content.encode("utf-8")

    def _format(self, template_name: str, content: str) -> str:
        if (
            self.assistant.file_format is FileFormat.TOML
            and self.is_command(template_name)
            and template_name.endswith(".md")
        ):
            return to_toml_command(content)
        return content

    def command_output_path(self, template_name: str) -> str:
        """Assistant-directory path for a command template, keeping any sub-directory."""
        relative = PurePosixPath(template_name[len(COMMANDS_PREFIX):])
        file_name = command_filename(template_name, self.assistant.file_format)
        if relative.parent != PurePosixPath("."):
            file_name = f"{relative.parent}/{file_name}"
        return self.assistant.directory + file_name

    def process_all(self) -> dict[str, bytes]:
        """Return ``{project-relative output path: content}`` for every template.

        Command templates appear twice: under ``.specify/templates/commands``
        and in the assistant's own command directory.
        """
        outputs: dict[str, bytes] = {}
        for template_name in self.assets.list_templates():
            try:
                content = self.process_template(template_name)
            except (AssetNotFoundError, UnicodeDecodeError) as exc:
                raise TemplateProcessingError(template_name, exc) from exc

            outputs[f"{TEMPLATES_DIR}/{template_name}"] = content
            if self.is_command(template_name):
                outputs[self.command_output_path(template_name)] = content
        return outputs

    def write_all(self, project_path: Path) -> list[Path]:
        outputs = self.process_all()
        written: list[Path] = []
        try:
            (project_path / self.assistant.directory).mkdir(parents=True, exist_ok=True)
            for relative, content in outputs.items():
                target = project_path / relative
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(content)
                written.append(target)
        except OSError as exc:
            raise FileSystemError(f"failed to write templates under {project_path}", exc) from exc

        logger.debug("Wrote %d template files for %s", len(written), self.assistant.key)
        return written


__all__ = [
    "TemplateProcessor",
    "command_filename",
    "setup_script_path",
    "split_frontmatter",
    "to_toml_command",
]
