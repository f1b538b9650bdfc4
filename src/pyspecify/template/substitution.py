"""Placeholder substitution for templates and scripts.

Placeholders are literal tokens; the four token strings are disjoint so
replacement order does not matter:

``__AGENT__``
    assistant key
``$ARGUMENTS`` / ``{{args}}``
    the assistant's own argument syntax
``{SCRIPT}``
    path of the script the document refers to

TOML command files only rewrite argument tokens inside the
``prompt = \"\"\" ... \"\"\"`` block; comments and keys elsewhere in the file
keep their literal text.
"""

from __future__ import annotations

import re

from pyspecify.core.config import AssistantProfile, FileFormat

AGENT_TOKEN = "__AGENT__"
SCRIPT_TOKEN = "{SCRIPT}"
ARGUMENT_TOKENS: tuple[str, ...] = ("$ARGUMENTS", "{{args}}")
PLACEHOLDER_TOKENS: tuple[str, ...] = (AGENT_TOKEN, SCRIPT_TOKEN, *ARGUMENT_TOKENS)

TRIPLE_QUOTE = '"""'
_PROMPT_OPEN = re.compile(r'^\s*prompt\s*=\s*"""')


def replace_arguments(text: str, arg_format: str) -> str:
    for token in ARGUMENT_TOKENS:
        text = text.replace(token, arg_format)
    return text


def replace_arguments_in_prompt_block(text: str, arg_format: str) -> str:
    """Replace argument tokens only inside ``prompt = \"\"\"`` blocks."""
    lines = text.split("\n")
    in_prompt = False
    for index, line in enumerate(lines):
        if not in_prompt:
            match = _PROMPT_OPEN.match(line)
            if not match:
                continue
            head, tail = line[: match.end()], line[match.end():]
            body, closing, rest = tail.partition(TRIPLE_QUOTE)
            lines[index] = head + replace_arguments(body, arg_format) + closing + rest
            in_prompt = not closing
        elif TRIPLE_QUOTE in line:
            body, closing, rest = line.partition(TRIPLE_QUOTE)
            lines[index] = replace_arguments(body, arg_format) + closing + rest
            in_prompt = False
        else:
            lines[index] = replace_arguments(line, arg_format)
    return "\n".join(lines)


def _replace_script_per_line(text: str, script_reference: str) -> str:
    lines = text.split("\n")
    for index, line in enumerate(lines):
        if SCRIPT_TOKEN in line:
            lines[index] = line.replace(SCRIPT_TOKEN, script_reference)
    return "\n".join(lines)


def substitute(content: str, assistant: AssistantProfile, script_reference: str) -> str:
    """Apply every placeholder rule for *assistant*'s file format."""
    content = content.replace(AGENT_TOKEN, assistant.key)

    if assistant.file_format is FileFormat.TOML:
        content = replace_arguments_in_prompt_block(content, assistant.arg_format)
        return content.replace(SCRIPT_TOKEN, script_reference)

    content = replace_arguments(content, assistant.arg_format)
    if assistant.file_format is FileFormat.MARKDOWN:
        return _replace_script_per_line(content, script_reference)
    return content.replace(SCRIPT_TOKEN, script_reference)


def substitute_script(content: str, agent_key: str, script_reference: str) -> str:
    """Scripts only carry the agent key and their own reference path."""
    return content.replace(AGENT_TOKEN, agent_key).replace(SCRIPT_TOKEN, script_reference)


def leftover_placeholders(content: str, assistant: AssistantProfile) -> list[str]:
    """Placeholder tokens still present after substitution.

    The assistant's own argument syntax is expected output and never counts
    as a leftover.
    """
    return [
        token
        for token in PLACEHOLDER_TOKENS
        if token != assistant.arg_format and token in content
    ]


__all__ = [
    "AGENT_TOKEN",
    "ARGUMENT_TOKENS",
    "PLACEHOLDER_TOKENS",
    "SCRIPT_TOKEN",
    "leftover_placeholders",
    "replace_arguments",
    "replace_arguments_in_prompt_block",
    "substitute",
    "substitute_script",
]
