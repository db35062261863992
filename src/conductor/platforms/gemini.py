"""Gemini CLI platform definition."""

from conductor.platforms.base import Platform
from conductor.templating import PlaceholderProfile, StaticPath, TomlEnvelope

GEMINI = Platform(
    name="gemini",
    display_name="Gemini CLI",
    cli_command="gemini",
    install_info="npm install -g @google/gemini-cli",
    profile=PlaceholderProfile(
        user_args="{{args}}",
        template_path=StaticPath("~/.gemini/extensions/conductor/templates"),
        editor_hint=(
            'the Gemini CLI built-in option "Modify with external editor" '
            "(if present), or with your favorite external editor"
        ),
        ignore_file=".geminiignore",
    ),
    envelope=TomlEnvelope(),
    command_path="commands/conductor/{name}.toml",
    context_file="GEMINI.md",
    manifest_source="gemini/gemini-extension.json",
    manifest_target="gemini-extension.json",
)
