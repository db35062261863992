"""Prompt templating: placeholder substitution, path resolution, envelopes."""

from conductor.templating.envelopes import (
    DEFAULT_ALLOWED_TOOLS,
    Envelope,
    MarkdownEnvelope,
    SkillEnvelope,
    TomlEnvelope,
    render_frontmatter,
)
from conductor.templating.paths import (
    RuntimeResolved,
    StaticPath,
    TemplatePath,
    resolve_template_path,
    runtime_marker,
)
from conductor.templating.placeholders import (
    EDITOR_HINT,
    IGNORE_FILE,
    PLACEHOLDER_TOKENS,
    TEMPLATE_PATH,
    USER_ARGS,
    PlaceholderProfile,
    UnresolvedPlaceholderError,
    find_unresolved,
    substitute,
)

__all__ = [
    "DEFAULT_ALLOWED_TOOLS",
    "EDITOR_HINT",
    "Envelope",
    "IGNORE_FILE",
    "MarkdownEnvelope",
    "PLACEHOLDER_TOKENS",
    "PlaceholderProfile",
    "RuntimeResolved",
    "SkillEnvelope",
    "StaticPath",
    "TEMPLATE_PATH",
    "TemplatePath",
    "TomlEnvelope",
    "USER_ARGS",
    "UnresolvedPlaceholderError",
    "find_unresolved",
    "render_frontmatter",
    "resolve_template_path",
    "runtime_marker",
    "substitute",
]
