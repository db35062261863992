"""Claude Code plugin installer.

Registers a local marketplace that points at the generated bundle and
installs the conductor plugin from it.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.markup import escape

from conductor.config.schema import BuildLayout
from conductor.console import console
from conductor.installers.base import (
    InstallError,
    RegistrationError,
    require_output_tree,
)
from conductor.platforms import CLAUDE

logger = logging.getLogger(__name__)

MARKETPLACE_NAME = "conductor-local"
MARKETPLACE_DIRNAME = "claude-marketplace"
PLUGIN_NAME = "conductor"
PLUGIN_REF = f"{PLUGIN_NAME}@{MARKETPLACE_NAME}"
PLUGIN_DESCRIPTION = (
    "Conductor: AI-driven spec-based development framework for managing "
    "tracks, specs, and plans"
)
MANIFEST_DIRNAME = ".claude-plugin"


@dataclass(frozen=True)
class ClaudeInstallResult:
    version: str
    marketplace_dir: Path
    plugin_dir: Path


def read_plugin_version(plugin_dir: Path) -> str:
    """Read the version field from the generated plugin manifest."""
    manifest = plugin_dir / MANIFEST_DIRNAME / "plugin.json"
    try:
        with manifest.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InstallError(f"Cannot read plugin manifest {manifest}: {e}") from e

    version = data.get("version") if isinstance(data, dict) else None
    if not version:
        raise InstallError(f"Plugin manifest {manifest} has no version")
    return str(version)


def build_marketplace_descriptor(version: str) -> dict[str, Any]:
    """Build the local marketplace document listing the conductor plugin."""
    return {
        "name": MARKETPLACE_NAME,
        "description": "Local marketplace for the Conductor plugin",
        "owner": {"name": "EventsAir"},
        "plugins": [
            {
                "name": PLUGIN_NAME,
                "description": PLUGIN_DESCRIPTION,
                "version": version,
                "source": f"./plugins/{PLUGIN_NAME}",
                "category": "development",
            }
        ],
    }


def write_marketplace(marketplace_dir: Path, plugin_dir: Path, version: str) -> Path:
    """Write the marketplace descriptor and link the plugin into it.

    The link points at the absolute plugin directory and replaces any
    previous link. Returns the descriptor path.
    """
    (marketplace_dir / MANIFEST_DIRNAME).mkdir(parents=True, exist_ok=True)
    (marketplace_dir / "plugins").mkdir(parents=True, exist_ok=True)

    descriptor = marketplace_dir / MANIFEST_DIRNAME / "marketplace.json"
    descriptor.write_text(
        json.dumps(build_marketplace_descriptor(version), indent=2) + "\n",
        encoding="utf-8",
    )

    link = marketplace_dir / "plugins" / PLUGIN_NAME
    if link.is_symlink() or link.is_file():
        link.unlink()
    elif link.is_dir():
        shutil.rmtree(link)
    link.symlink_to(plugin_dir.resolve(), target_is_directory=True)

    return descriptor


class ClaudePluginCLI:
    """Plugin registration through the ``claude`` CLI."""

    def __init__(self, command: str = "claude") -> None:
        self._command = command

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        logger.debug("Running %s %s", self._command, " ".join(args))
        return subprocess.run(
            [self._command, "plugin", *args],
            capture_output=True,
            text=True,
        )

    def _try(self, *args: str) -> bool:
        """Run a step whose failure means there was nothing to remove."""
        try:
            result = self._run(*args)
        except FileNotFoundError:
            return False
        return result.returncode == 0

    def _require(self, *args: str) -> None:
        try:
            result = self._run(*args)
        except FileNotFoundError:
            raise RegistrationError(
                f"'{self._command}' CLI not found in PATH"
            ) from None
        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise RegistrationError(
                f"'{self._command} plugin {' '.join(args)}' failed"
                + (f": {detail}" if detail else "")
            )

    def remove_marketplace(self, name: str) -> bool:
        """Remove a marketplace registration. Returns False if none was removed."""
        return self._try("marketplace", "remove", name)

    def uninstall_plugin(self, ref: str) -> bool:
        """Uninstall a plugin. Returns False if none was removed."""
        return self._try("uninstall", ref)

    def add_marketplace(self, path: Path) -> None:
        self._require("marketplace", "add", str(path))

    def install_plugin(self, ref: str) -> None:
        self._require("install", ref)


def install_claude(
    layout: BuildLayout, cli: ClaudePluginCLI | None = None
) -> ClaudeInstallResult:
    """Register the generated Claude Code bundle and install the plugin."""
    plugin_dir = CLAUDE.output_dir(layout.dist_dir)
    require_output_tree(CLAUDE.name, plugin_dir, MANIFEST_DIRNAME)

    version = read_plugin_version(plugin_dir)
    console.print("[bold]=== Conductor Claude Code Installer ===[/bold]")
    console.print(f"Version: {escape(version)}\n")

    marketplace_dir = layout.dist_dir / MARKETPLACE_DIRNAME
    write_marketplace(marketplace_dir, plugin_dir, version)

    cli = cli or ClaudePluginCLI(layout.claude_cli)
    if cli.remove_marketplace(MARKETPLACE_NAME):
        console.print(f"[dim]Removed previous marketplace {MARKETPLACE_NAME}[/dim]")
    if cli.uninstall_plugin(PLUGIN_REF):
        console.print(f"[dim]Removed previous install of {PLUGIN_REF}[/dim]")

    console.print("Registering local marketplace...")
    cli.add_marketplace(marketplace_dir)

    console.print("Installing conductor plugin...")
    cli.install_plugin(PLUGIN_REF)

    return ClaudeInstallResult(
        version=version, marketplace_dir=marketplace_dir, plugin_dir=plugin_dir
    )
