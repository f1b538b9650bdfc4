from __future__ import annotations

import pytest

from pyspecify.core.config import AI_ASSISTANTS, get_assistant
from pyspecify.template.substitution import (
    leftover_placeholders,
    replace_arguments_in_prompt_block,
    substitute,
    substitute_script,
)


def test_markdown_assistant_replaces_every_token() -> None:
    claude = get_assistant("claude")
    output = substitute(
        "Agent __AGENT__ runs {SCRIPT} with $ARGUMENTS and {{args}}.",
        claude,
        ".specify/scripts/setup.sh",
    )

    assert output == "Agent claude runs .specify/scripts/setup.sh with $ARGUMENTS and $ARGUMENTS."
    assert leftover_placeholders(output, claude) == []


def test_prompt_assistant_uses_markdown_argument_syntax() -> None:
    copilot = get_assistant("copilot")
    output = substitute("{{args}} / $ARGUMENTS / __AGENT__", copilot, "x")

    assert output == "$ARGUMENTS / $ARGUMENTS / copilot"


def test_toml_arguments_only_replaced_inside_prompt_block() -> None:
    content = (
        '# literal $ARGUMENTS stays here\n'
        'description = "Run for __AGENT__"\n'
        '\n'
        'prompt = """\n'
        'Use $ARGUMENTS now.\n'
        '"""\n'
        'footer = "$ARGUMENTS"\n'
    )

    output = substitute(content, get_assistant("gemini"), ".specify/scripts/setup.sh")

    assert "# literal $ARGUMENTS stays here" in output
    assert "Use {{args}} now." in output
    assert 'footer = "$ARGUMENTS"' in output
    assert 'description = "Run for gemini"' in output


def test_prompt_block_on_single_line() -> None:
    output = replace_arguments_in_prompt_block('prompt = """Go $ARGUMENTS""" # $ARGUMENTS', "{{args}}")

    assert output == 'prompt = """Go {{args}}""" # $ARGUMENTS'


def test_prompt_block_text_on_opening_and_closing_lines() -> None:
    content = 'prompt = """first $ARGUMENTS\nmiddle $ARGUMENTS\nlast $ARGUMENTS"""\nafter $ARGUMENTS'

    output = replace_arguments_in_prompt_block(content, "{{args}}")

    assert output == 'prompt = """first {{args}}\nmiddle {{args}}\nlast {{args}}"""\nafter $ARGUMENTS'


@pytest.mark.parametrize("key", sorted(AI_ASSISTANTS))
def test_substitution_is_idempotent(key: str) -> None:
    assistant = AI_ASSISTANTS[key]
    content = 'description = "x"\nprompt = """\n__AGENT__ {SCRIPT} $ARGUMENTS {{args}}\n"""\n'

    once = substitute(content, assistant, ".specify/scripts/setup.ps1")
    twice = substitute(once, assistant, ".specify/scripts/setup.ps1")

    assert once == twice


def test_leftover_ignores_own_argument_syntax() -> None:
    gemini = get_assistant("gemini")

    assert leftover_placeholders("run {{args}}", gemini) == []
    assert leftover_placeholders("run $ARGUMENTS __AGENT__", gemini) == ["__AGENT__", "$ARGUMENTS"]


def test_substitute_script_only_touches_agent_and_script() -> None:
    output = substitute_script('echo "__AGENT__" via {SCRIPT} "$@"', "qwen", "./setup.sh")

    assert output == 'echo "qwen" via ./setup.sh "$@"'
