"""Augment Code platform definition."""

from conductor.platforms.base import Platform
from conductor.templating import (
    MarkdownEnvelope,
    PlaceholderProfile,
    RuntimeResolved,
    runtime_marker,
)

# Augment reads CLAUDE.md natively.
AUGMENT = Platform(
    name="augment",
    display_name="Augment Code",
    cli_command="auggie",
    install_info="npm install -g @augmentcode/auggie",
    profile=PlaceholderProfile(
        user_args="$ARGUMENTS",
        template_path=RuntimeResolved(marker=runtime_marker("augment")),
        editor_hint="your preferred text editor",
        ignore_file=".gitignore",
    ),
    envelope=MarkdownEnvelope(),
    command_path=".augment/commands/conductor/{name}.md",
    context_file="CLAUDE.md",
)
