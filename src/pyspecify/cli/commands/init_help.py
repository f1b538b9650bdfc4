"""Shared help text for the init command."""

INIT_COMMAND_DOC = """
Initialize a new Specify project from the bundled templates.

Interactive Mode (default in a terminal):
- Prompts you to select an AI assistant
- Choose script type (sh/ps)

Non-Interactive Mode (with --ai / --script, or when stdin is not a TTY):
- Skips all prompts
- Uses provided options, saved defaults (.pyspecify.yaml) or built-in defaults

What Gets Created:
- .specify/templates/ - Spec, plan and task templates plus command sources
- .specify/scripts/ - Helper scripts for the chosen shell (executable)
- Agent commands (.claude/commands/, .gemini/commands/, .github/prompts/, etc.)
- Git repository (unless --no-git or one already exists)

Valid --ai keys:
copilot, claude, gemini, cursor, qwen, opencode, codex, windsurf,
kilocode, auggie, roo.

Examples:
  pyspecify init my-project                     # Interactive mode
  pyspecify init my-project --ai claude         # Claude Code commands
  pyspecify init my-project --ai gemini --script ps
  pyspecify init my-project --ai copilot --no-git
  pyspecify init . --ai claude                  # Current directory
  pyspecify init --here --ai codex --force      # Non-empty current directory
"""
