"""Shared installer errors and checks."""

from pathlib import Path


class InstallError(Exception):
    """Raised when an installer cannot complete."""


class MissingOutputTreeError(InstallError):
    """Raised when an installer runs before the bundle was built."""

    def __init__(self, platform: str, path: Path) -> None:
        self.platform = platform
        self.path = path
        super().__init__(
            f"dist/{platform}/ not found at {path}. Run 'conductor build' first."
        )


class RegistrationError(InstallError):
    """Raised when a host CLI registration or install step fails."""


def require_output_tree(platform: str, output_dir: Path, marker: str) -> None:
    """Fail fast unless ``output_dir/marker`` exists as a directory."""
    if not (output_dir / marker).is_dir():
        raise MissingOutputTreeError(platform, output_dir)
