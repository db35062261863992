"""Installers that place generated bundles into host environments."""

from conductor.installers.base import (
    InstallError,
    MissingOutputTreeError,
    RegistrationError,
    require_output_tree,
)
from conductor.installers.claude import (
    ClaudeInstallResult,
    ClaudePluginCLI,
    install_claude,
)
from conductor.installers.copilot import (
    CONDUCTOR_SKILLS,
    CopilotInstallResult,
    install_copilot,
)

__all__ = [
    "CONDUCTOR_SKILLS",
    "ClaudeInstallResult",
    "ClaudePluginCLI",
    "CopilotInstallResult",
    "InstallError",
    "MissingOutputTreeError",
    "RegistrationError",
    "install_claude",
    "install_copilot",
    "require_output_tree",
]
