"""Configuration schema for conductor builds and installs."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any


class UnsafeOutputDirError(ValueError):
    """Raised when the output directory would overlap the project or its inputs."""


@dataclass(frozen=True)
class BuildLayout:
    """Absolute locations of every build input and output.

    Resolved once from a ConductorConfig and passed explicitly to the
    builder, preflight checks and installers.
    """

    root: Path
    prompts_dir: Path
    context_file: Path
    metadata_file: Path
    templates_dir: Path
    platforms_dir: Path
    dist_dir: Path
    claude_cli: str = "claude"

    def inputs(self) -> tuple[Path, ...]:
        return (
            self.prompts_dir,
            self.context_file,
            self.metadata_file,
            self.templates_dir,
            self.platforms_dir,
        )

    def check_output_dir(self) -> None:
        """Check the output directory can be removed without touching inputs.

        Raises UnsafeOutputDirError if dist_dir is the project root, one of
        its ancestors, or contains any build input.
        """
        dist = self.dist_dir.resolve()
        root = self.root.resolve()
        if root.is_relative_to(dist):
            raise UnsafeOutputDirError(
                f"Output directory {dist} contains the project root {root}"
            )
        for path in self.inputs():
            if path.resolve().is_relative_to(dist):
                raise UnsafeOutputDirError(
                    f"Output directory {dist} contains build input {path}"
                )


@dataclass
class ConductorConfig:
    """Conductor configuration schema.

    Paths are relative to the project root unless absolute.
    None values indicate "not set" and will use defaults or be inherited.
    """

    # Source tree
    prompts_dir: str | None = None
    context_file: str | None = None
    metadata_file: str | None = None
    templates_dir: str | None = None
    platforms_dir: str | None = None

    # Output tree
    dist_dir: str | None = None

    # Host CLIs
    claude_cli: str | None = None

    def merge(self, other: ConductorConfig) -> ConductorConfig:
        """Merge another config into this one.

        Values from `other` take precedence when they are not None.
        Returns a new ConductorConfig instance.
        """
        merged: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(other, f.name)
            merged[f.name] = value if value is not None else getattr(self, f.name)
        return ConductorConfig(**merged)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary, excluding None values."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConductorConfig:
        """Create a ConductorConfig from a dictionary.

        Unknown keys are ignored. Values are coerced to strings.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            values[f.name] = str(raw) if raw is not None else None
        return cls(**values)

    def resolve(self, root: Path) -> BuildLayout:
        """Resolve against a project root, falling back to DEFAULT_CONFIG."""
        config = DEFAULT_CONFIG.merge(self)
        root = root.resolve()

        def _path(value: str | None) -> Path:
            path = Path(str(value)).expanduser()
            return path if path.is_absolute() else root / path

        return BuildLayout(
            root=root,
            prompts_dir=_path(config.prompts_dir),
            context_file=_path(config.context_file),
            metadata_file=_path(config.metadata_file),
            templates_dir=_path(config.templates_dir),
            platforms_dir=_path(config.platforms_dir),
            dist_dir=_path(config.dist_dir),
            claude_cli=config.claude_cli or "claude",
        )


# Default configuration values (used when not specified anywhere)
DEFAULT_CONFIG = ConductorConfig(
    prompts_dir="src/prompts",
    context_file="src/context/file-resolution.md",
    metadata_file="src/metadata/commands.json",
    templates_dir="templates",
    platforms_dir="platforms",
    dist_dir="dist",
    claude_cli="claude",
)
