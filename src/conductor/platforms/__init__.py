"""Supported host platforms, in build order."""

from conductor.platforms.augment import AUGMENT
from conductor.platforms.base import Platform
from conductor.platforms.claude import CLAUDE
from conductor.platforms.copilot import COPILOT
from conductor.platforms.gemini import GEMINI

__all__ = [
    "Platform",
    "PLATFORMS",
    "AUGMENT",
    "CLAUDE",
    "COPILOT",
    "GEMINI",
    "get_platform_by_name",
]

PLATFORMS: tuple[Platform, ...] = (
    GEMINI,
    CLAUDE,
    AUGMENT,
    COPILOT,
)


def get_platform_by_name(name: str) -> Platform | None:
    """Find platform by name or display name (case-insensitive)."""
    name_lower = name.lower()
    for platform in PLATFORMS:
        if name_lower in (platform.name, platform.display_name.lower()):
            return platform
    return None
