"""Output envelopes wrapping rendered prompts for each host format."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

import yaml

DEFAULT_ALLOWED_TOOLS: tuple[str, ...] = (
    "Bash",
    "Read",
    "Write",
    "Edit",
    "Grep",
    "Glob",
)

_TOML_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _escape_control(char: str) -> str:
    """Escape a character TOML does not allow literally in strings."""
    if char in _TOML_ESCAPES:
        return _TOML_ESCAPES[char]
    return f"\\u{ord(char):04X}"


def _is_control(char: str) -> bool:
    code = ord(char)
    return code < 0x20 or code == 0x7F


def toml_basic_string(value: str) -> str:
    """Escape value for a single-line TOML basic string (without quotes)."""
    out: list[str] = []
    for char in value:
        if char in ('"', "\\") or (_is_control(char) and char != "\t"):
            out.append(_escape_control(char))
        else:
            out.append(char)
    return "".join(out)


def toml_multiline_string(value: str) -> str:
    """Escape value for a TOML multi-line basic string (without delimiters).

    Newlines and tabs stay literal. Backslashes, other control characters
    and runs of three quotes are escaped.
    """
    # A trailing quote would merge with the closing delimiter.
    trailing = ""
    if value.endswith('"'):
        value, trailing = value[:-1], '\\"'

    out: list[str] = []
    for char in value:
        if char == "\\" or (_is_control(char) and char not in ("\t", "\n")):
            out.append(_escape_control(char))
        else:
            out.append(char)
    return "".join(out).replace('"""', '""\\"') + trailing


def render_frontmatter(metadata: dict[str, Any]) -> str:
    """Serialize metadata as a fenced YAML frontmatter block."""
    dumped = yaml.safe_dump(
        metadata,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=1000,
    )
    return f"---\n{dumped}---\n"


@dataclass(frozen=True)
class TomlEnvelope:
    """Gemini CLI command: a ``description`` and a multi-line ``prompt``."""

    kind: ClassVar[str] = "toml"
    extension: ClassVar[str] = ".toml"

    def wrap(self, name: str, description: str, body: str) -> str:
        return (
            f'description = "{toml_basic_string(description)}"\n'
            f'prompt = """\n{toml_multiline_string(body)}"""\n'
        )


@dataclass(frozen=True)
class SkillEnvelope:
    """Claude Code skill: frontmatter with an allowed-tools list, then body."""

    allowed_tools: tuple[str, ...] = DEFAULT_ALLOWED_TOOLS

    kind: ClassVar[str] = "skill"
    extension: ClassVar[str] = ".md"

    def wrap(self, name: str, description: str, body: str) -> str:
        frontmatter = render_frontmatter(
            {
                "name": name,
                "description": description,
                "allowed-tools": ", ".join(self.allowed_tools),
            }
        )
        return f"{frontmatter}\n{body}"


@dataclass(frozen=True)
class MarkdownEnvelope:
    """Markdown command: frontmatter with name and description, then body."""

    kind: ClassVar[str] = "markdown"
    extension: ClassVar[str] = ".md"

    def wrap(self, name: str, description: str, body: str) -> str:
        frontmatter = render_frontmatter({"name": name, "description": description})
        return f"{frontmatter}\n{body}"


Envelope = TomlEnvelope | SkillEnvelope | MarkdownEnvelope
