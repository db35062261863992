"""Claude Code platform definition."""

from conductor.platforms.base import Platform
from conductor.templating import (
    PlaceholderProfile,
    RuntimeResolved,
    SkillEnvelope,
    runtime_marker,
)

CLAUDE = Platform(
    name="claude",
    display_name="Claude Code",
    cli_command="claude",
    install_info="https://github.com/anthropics/claude-code",
    profile=PlaceholderProfile(
        user_args="$ARGUMENTS",
        template_path=RuntimeResolved(marker=runtime_marker("claude")),
        editor_hint="your preferred text editor",
        ignore_file=".gitignore",
    ),
    envelope=SkillEnvelope(),
    command_path="skills/{name}/SKILL.md",
    context_file="CLAUDE.md",
    manifest_source="claude/plugin.json",
    manifest_target=".claude-plugin/plugin.json",
)
