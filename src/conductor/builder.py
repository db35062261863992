"""Build platform bundles from the canonical source tree."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from conductor.commands import CommandSpec, load_commands
from conductor.config.schema import BuildLayout
from conductor.console import console
from conductor.platforms import PLATFORMS, Platform
from conductor.templating import (
    RuntimeResolved,
    UnresolvedPlaceholderError,
    find_unresolved,
    resolve_template_path,
    substitute,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedCommand:
    """A command left out of a platform because its prompt file is missing."""

    platform: str
    command: str
    source: Path


@dataclass
class BuildReport:
    """Outcome of a build run."""

    built: dict[str, list[str]] = field(default_factory=dict)
    skipped: list[SkippedCommand] = field(default_factory=list)

    def record_built(self, platform: str, command: str) -> None:
        self.built.setdefault(platform, []).append(command)

    @property
    def total_built(self) -> int:
        return sum(len(commands) for commands in self.built.values())


def read_prompt(path: Path) -> str:
    """Read a prompt file with trailing newlines normalised to one."""
    return path.read_text(encoding="utf-8").rstrip("\n") + "\n"


def render_command(platform: Platform, command: CommandSpec, content: str) -> str:
    """Render prompt content into the platform's final file text.

    Raises UnresolvedPlaceholderError if any token survives substitution.
    """
    template_path = platform.profile.template_path
    body = substitute(content, platform.profile)
    body = resolve_template_path(body, template_path)

    markers = (
        (template_path.marker,) if isinstance(template_path, RuntimeResolved) else ()
    )
    leftover = find_unresolved(body, markers)
    if leftover:
        raise UnresolvedPlaceholderError(
            leftover, where=f"{command.name} ({platform.name})"
        )

    return platform.envelope.wrap(command.name, command.description, body)


def clean_output(
    layout: BuildLayout, platforms: tuple[Platform, ...] | None = None
) -> None:
    """Remove the output tree, or only the given platforms' directories.

    Raises UnsafeOutputDirError before removing anything if the output
    directory overlaps the project root or a build input.
    """
    layout.check_output_dir()

    if platforms is None:
        targets = [layout.dist_dir]
    else:
        targets = [platform.output_dir(layout.dist_dir) for platform in platforms]

    for target in targets:
        if target.exists():
            logger.debug("Removing %s", target)
            shutil.rmtree(target)


def build_commands(layout: BuildLayout, platform: Platform, report: BuildReport) -> None:
    """Render every command in the metadata for one platform.

    Commands whose prompt file is missing are skipped with a warning.
    """
    output_dir = platform.output_dir(layout.dist_dir)

    for command in load_commands(layout.metadata_file):
        prompt_path = layout.prompts_dir / command.source_file
        if not prompt_path.is_file():
            logger.warning(
                "Source file not found: %s (skipping %s)", prompt_path, command.name
            )
            console.print(
                f"[yellow]WARNING: Source file not found: {escape(str(prompt_path))} "
                f"(skipping {escape(command.name)})[/yellow]"
            )
            report.skipped.append(
                SkippedCommand(
                    platform=platform.name, command=command.name, source=prompt_path
                )
            )
            continue

        text = render_command(platform, command, read_prompt(prompt_path))
        output_path = platform.command_output_path(output_dir, command.name)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")

        report.record_built(platform.name, command.name)
        console.print(f"  Built: {escape(command.name)} ({platform.name})")


def build_platform(layout: BuildLayout, platform: Platform, report: BuildReport) -> Path:
    """Build the complete output tree for one platform.

    Returns the platform output directory. Copy failures propagate.
    """
    console.print(f"[bold]Building {platform.display_name}...[/bold]")
    output_dir = platform.output_dir(layout.dist_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    if platform.manifest_target:
        (output_dir / platform.manifest_target).parent.mkdir(
            parents=True, exist_ok=True
        )

    build_commands(layout, platform, report)

    shutil.copyfile(layout.context_file, output_dir / platform.context_file)

    if platform.manifest_source and platform.manifest_target:
        shutil.copyfile(
            layout.platforms_dir / platform.manifest_source,
            output_dir / platform.manifest_target,
        )

    shutil.copytree(layout.templates_dir, output_dir / "templates")

    console.print()
    return output_dir


def build_all(
    layout: BuildLayout, platforms: tuple[Platform, ...] | None = None
) -> BuildReport:
    """Clean the output tree and build platforms in order.

    With no platforms given, the whole output tree is rebuilt. Otherwise only
    the selected platforms are cleaned and rebuilt.
    """
    report = BuildReport()

    clean_output(layout, platforms)
    for platform in platforms or PLATFORMS:
        build_platform(layout, platform, report)

    return report
