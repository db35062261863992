"""Base platform definition."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from conductor.templating import Envelope, PlaceholderProfile


@dataclass(frozen=True)
class Platform:
    """Definition of an AI coding host that consumes a generated bundle."""

    name: str  # Output directory under dist/, e.g. "gemini"
    display_name: str
    cli_command: str
    install_info: str
    profile: PlaceholderProfile
    envelope: Envelope
    command_path: str  # Relative to the platform output dir, "{name}" is the command
    context_file: str  # e.g. "GEMINI.md"
    manifest_source: str | None = None  # Relative to the platforms dir
    manifest_target: str | None = None  # Relative to the platform output dir

    def is_installed(self) -> bool:
        """Check if this host's CLI command is available in PATH."""
        return shutil.which(self.cli_command) is not None

    def output_dir(self, dist_dir: Path) -> Path:
        return dist_dir / self.name

    def command_output_path(self, output_dir: Path, command_name: str) -> Path:
        return output_dir / self.command_path.format(name=command_name)
