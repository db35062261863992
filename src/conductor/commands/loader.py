"""Command metadata loading."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from conductor.commands.base import CommandSpec, MetadataError


def read_metadata(path: Path) -> dict[str, Any]:
    """Parse the metadata JSON file.

    Raises MetadataError if the file is not valid JSON or its top level is
    not an object. A missing file raises FileNotFoundError.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MetadataError(f"Malformed metadata in {path}: {e}") from e

    if not isinstance(data, dict):
        raise MetadataError(f"Metadata in {path} must be a JSON object")

    result: dict[str, Any] = data
    return result


def get_command_field(path: Path, name: str, field: str) -> str:
    """Return a string field of a command, or "" if command or field is absent."""
    entry = read_metadata(path).get(name)
    if not isinstance(entry, dict):
        return ""
    value = entry.get(field)
    if value is None:
        return ""
    return str(value)


def iter_command_names(path: Path) -> Iterator[str]:
    """Yield command names in document order.

    The file is read when iteration starts, so each call sees the current
    contents.
    """
    yield from read_metadata(path)


def load_commands(path: Path) -> list[CommandSpec]:
    """Load and validate every command declared in the metadata file."""
    commands: list[CommandSpec] = []
    for name, entry in read_metadata(path).items():
        if not isinstance(entry, dict):
            raise MetadataError(f"Command '{name}': entry must be an object")
        commands.append(CommandSpec.from_dict(name, entry))
    return commands
