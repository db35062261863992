"""GitHub Copilot platform definition."""

from conductor.platforms.base import Platform
from conductor.templating import MarkdownEnvelope, PlaceholderProfile, StaticPath

# The copilot installer copies templates/ into the project root.
COPILOT = Platform(
    name="copilot",
    display_name="GitHub Copilot",
    cli_command="copilot",
    install_info="npm install -g @github/copilot",
    profile=PlaceholderProfile(
        user_args="$ARGUMENTS",
        template_path=StaticPath("templates"),
        editor_hint="your preferred text editor",
        ignore_file=".gitignore",
    ),
    envelope=MarkdownEnvelope(),
    command_path=".github/skills/{name}/SKILL.md",
    context_file="COPILOT.md",
)
