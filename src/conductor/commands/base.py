"""Base command definition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class MetadataError(ValueError):
    """Raised when the command metadata cannot be parsed or validated."""


@dataclass(frozen=True)
class CommandSpec:
    """A conductor command as declared in the metadata file.

    Each command maps to one canonical prompt file and is rendered once per
    platform during a build.
    """

    name: str  # e.g. "setup", "newTrack"
    source_file: str  # Prompt file relative to the prompts directory
    description: str = ""

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> CommandSpec:
        """Create a CommandSpec from a metadata entry.

        ``source_file`` defaults to ``<name>.md`` when absent or empty.
        Unknown keys are ignored.
        """
        source_file = data.get("source_file")
        if source_file is not None and not isinstance(source_file, str):
            raise MetadataError(f"Command '{name}': source_file must be a string")

        description = data.get("description", "")
        if description is None:
            description = ""
        if not isinstance(description, str):
            raise MetadataError(f"Command '{name}': description must be a string")

        return cls(
            name=name,
            source_file=source_file or f"{name}.md",
            description=description,
        )
