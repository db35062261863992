"""GitHub Copilot agent skills installer."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from conductor.config.schema import BuildLayout
from conductor.console import console
from conductor.installers.base import InstallError, require_output_tree
from conductor.platforms import COPILOT

# Skill folders owned by conductor; removed before every reinstall.
CONDUCTOR_SKILLS: tuple[str, ...] = (
    "setup",
    "newTrack",
    "implement",
    "review",
    "status",
    "revert",
)


@dataclass(frozen=True)
class CopilotInstallResult:
    target: Path
    skills_dir: Path
    skills: tuple[str, ...]
    updated: bool  # True if a skills directory already existed
    templates_installed: bool


def _copy_entry(source: Path, dest: Path) -> None:
    if source.is_dir():
        shutil.copytree(source, dest, dirs_exist_ok=True)
    else:
        shutil.copy2(source, dest)


def install_copilot(layout: BuildLayout, target: Path | None = None) -> CopilotInstallResult:
    """Copy the generated Copilot skills into a project directory.

    Args:
        layout: Resolved build layout holding the output tree.
        target: Project directory to install into (default: current directory).

    An existing templates/ directory in the target is left untouched.
    """
    bundle_dir = COPILOT.output_dir(layout.dist_dir)
    target = (target or Path.cwd()).resolve()
    if not target.is_dir():
        raise InstallError(f"Target directory does not exist: {target}")

    require_output_tree(COPILOT.name, bundle_dir, ".github")

    console.print("[bold]=== Conductor GitHub Copilot Installer ===[/bold]")
    console.print(f"Target directory: {escape(str(target))}\n")

    github_dir = target / ".github"
    github_dir.mkdir(exist_ok=True)

    skills_dir = github_dir / "skills"
    updated = skills_dir.is_dir()
    if updated:
        console.print("Updating existing skills...")
        for name in CONDUCTOR_SKILLS:
            old = skills_dir / name
            if old.is_dir() and not old.is_symlink():
                shutil.rmtree(old)
            elif old.exists() or old.is_symlink():
                old.unlink()
    else:
        console.print("Creating skills directory...")
        skills_dir.mkdir(parents=True)

    console.print("Installing Conductor Agent Skills...")
    source_skills = bundle_dir / ".github" / "skills"
    installed: list[str] = []
    if source_skills.is_dir():
        for entry in sorted(source_skills.iterdir()):
            _copy_entry(entry, skills_dir / entry.name)
            installed.append(entry.name)

    console.print("Installing context file...")
    shutil.copyfile(
        bundle_dir / COPILOT.context_file, target / COPILOT.context_file
    )

    templates_dir = target / "templates"
    templates_installed = not templates_dir.exists()
    if templates_installed:
        console.print("Installing templates...")
        shutil.copytree(bundle_dir / "templates", templates_dir)
    else:
        console.print("[dim]Templates directory already exists, skipping...[/dim]")

    return CopilotInstallResult(
        target=target,
        skills_dir=skills_dir,
        skills=tuple(installed),
        updated=updated,
        templates_installed=templates_installed,
    )
