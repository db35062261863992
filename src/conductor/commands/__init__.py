"""Command metadata: the commands every platform bundle is built from."""

from conductor.commands.base import CommandSpec, MetadataError
from conductor.commands.loader import (
    get_command_field,
    iter_command_names,
    load_commands,
    read_metadata,
)

__all__ = [
    "CommandSpec",
    "MetadataError",
    "get_command_field",
    "iter_command_names",
    "load_commands",
    "read_metadata",
]
