"""Placeholder tokens and per-platform substitution."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from conductor.templating.paths import TemplatePath

USER_ARGS = "__USER_ARGS__"
TEMPLATE_PATH = "__TEMPLATE_PATH__"
EDITOR_HINT = "__EDITOR_HINT__"
IGNORE_FILE = "__IGNORE_FILE__"

# Replacement order. Tokens never overlap, so the order does not change output.
PLACEHOLDER_TOKENS: tuple[str, ...] = (
    USER_ARGS,
    TEMPLATE_PATH,
    EDITOR_HINT,
    IGNORE_FILE,
)


class UnresolvedPlaceholderError(Exception):
    """Raised when rendered content still contains a placeholder token."""

    def __init__(self, tokens: list[str], where: str = "") -> None:
        self.tokens = tokens
        self.where = where
        location = f" in {where}" if where else ""
        super().__init__(f"Unresolved placeholders{location}: {', '.join(tokens)}")


@dataclass(frozen=True)
class PlaceholderProfile:
    """Replacement values for every public placeholder token on one platform.

    Values must not themselves contain placeholder tokens.
    """

    user_args: str
    template_path: TemplatePath
    editor_hint: str
    ignore_file: str

    def values(self) -> dict[str, str]:
        """Map each public token to its replacement value."""
        return {
            USER_ARGS: self.user_args,
            TEMPLATE_PATH: self.template_path.placeholder(),
            EDITOR_HINT: self.editor_hint,
            IGNORE_FILE: self.ignore_file,
        }


def substitute(content: str, profile: PlaceholderProfile) -> str:
    """Replace every occurrence of each public token with the profile value."""
    values = profile.values()
    for token in PLACEHOLDER_TOKENS:
        content = content.replace(token, values[token])
    return content


def find_unresolved(content: str, markers: Iterable[str] = ()) -> list[str]:
    """Return the tokens and markers still present in content."""
    return [
        token for token in (*PLACEHOLDER_TOKENS, *markers) if token in content
    ]
