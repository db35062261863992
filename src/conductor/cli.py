"""Command-line interface for conductor."""

import logging
from pathlib import Path

import click
from rich.markup import escape

from conductor import __version__
from conductor.builder import build_all
from conductor.commands import MetadataError
from conductor.config.loader import load_config, load_layout
from conductor.config.preflight import run_all_checks
from conductor.config.schema import BuildLayout, UnsafeOutputDirError
from conductor.console import console
from conductor.installers import (
    InstallError,
    MissingOutputTreeError,
    install_claude,
    install_copilot,
)
from conductor.platforms import PLATFORMS, Platform, get_platform_by_name
from conductor.templating import UnresolvedPlaceholderError

logger = logging.getLogger(__name__)


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"conductor [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def platforms_callback(
    _ctx: click.Context, _param: click.Parameter, value: tuple[str, ...]
) -> tuple[Platform, ...] | None:
    """Resolve --platform names, keeping build order."""
    if not value:
        return None
    selected = set()
    for name in value:
        platform = get_platform_by_name(name)
        if platform is None:
            choices = ", ".join(p.name for p in PLATFORMS)
            raise click.BadParameter(
                f"Unknown platform '{name}' (choose from {choices})"
            )
        selected.add(platform.name)
    return tuple(p for p in PLATFORMS if p.name in selected)


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    envvar="CONDUCTOR_ROOT",
    help="Project root holding src/, templates/ and platforms/ (default: cwd).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, root: Path | None, verbose: bool) -> None:
    """Conductor - build and install AI assistant plugin bundles."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = load_layout(root or Path.cwd())
    logger.debug("Using layout: %s", ctx.obj)

    if ctx.invoked_subcommand is None:
        console.print("[bold]conductor[/bold] - platform bundles from canonical prompts")
        console.print("\nRun [cyan]conductor --help[/cyan] for available commands.")


@main.command()
@click.option(
    "--platform",
    "-p",
    "selected",
    multiple=True,
    callback=platforms_callback,
    help="Build only this platform (repeatable). Default: all.",
)
@click.pass_obj
def build(layout: BuildLayout, selected: tuple[Platform, ...] | None) -> None:
    """Regenerate platform bundles under the output directory."""
    console.print("[bold]=== Conductor Build ===[/bold]\n")

    try:
        report = build_all(layout, selected)
    except UnsafeOutputDirError as e:
        console.print(f"[red]Refusing to clean output: {escape(str(e))}[/red]")
        raise SystemExit(1) from None
    except FileNotFoundError as e:
        console.print(f"[red]Missing build input: {escape(str(e.filename))}[/red]")
        raise SystemExit(1) from None
    except MetadataError as e:
        console.print(f"[red]Metadata error: {escape(str(e))}[/red]")
        raise SystemExit(1) from None
    except UnresolvedPlaceholderError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from None
    except OSError as e:
        console.print(f"[red]Build failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    console.print("[bold green]=== Build Complete ===[/bold green]")
    console.print(f"Built {report.total_built} command file(s)")
    if report.skipped:
        console.print(f"[yellow]Skipped {len(report.skipped)} (missing source)[/yellow]")
    console.print("Output directories:")
    for platform in selected or PLATFORMS:
        output_dir = escape(str(platform.output_dir(layout.dist_dir)))
        console.print(f"  {output_dir}/ - {platform.display_name}")


@main.group()
def install() -> None:
    """Install a generated bundle into a host environment."""


@install.command("claude")
@click.pass_obj
def install_claude_command(layout: BuildLayout) -> None:
    """Register the Claude Code plugin through a local marketplace."""
    try:
        result = install_claude(layout)
    except MissingOutputTreeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1) from None
    except InstallError as e:
        console.print(f"[red]Installation failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from None
    except OSError as e:
        console.print(f"[red]Installation failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    console.print("\n[bold green]=== Installation Complete ===[/bold green]")
    console.print(f"Installed conductor {escape(result.version)}")
    console.print("Restart Claude Code to load the plugin.")


@install.command("copilot")
@click.argument(
    "target",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.pass_obj
def install_copilot_command(layout: BuildLayout, target: Path | None) -> None:
    """Copy GitHub Copilot agent skills into TARGET (default: current directory)."""
    try:
        result = install_copilot(layout, target)
    except MissingOutputTreeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1) from None
    except InstallError as e:
        console.print(f"[red]Installation failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from None
    except OSError as e:
        console.print(f"[red]Installation failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    console.print("\n[bold green]=== Installation Complete ===[/bold green]")
    console.print(
        f"Conductor Agent Skills installed to: {escape(str(result.skills_dir))}"
    )
    if result.skills:
        console.print("Available skills:")
        for name in result.skills:
            console.print(f"  - {escape(name)}")


@main.command()
@click.pass_obj
def preflight(layout: BuildLayout) -> None:
    """Validate the source tree and report installed host CLIs."""
    if not run_all_checks(layout):
        raise SystemExit(1)


@main.command()
@click.pass_obj
def platforms(layout: BuildLayout) -> None:
    """List supported platforms and their output layout."""
    for platform in PLATFORMS:
        status = (
            "[green]✓[/green]" if platform.is_installed() else "[dim]✗[/dim]"
        )
        console.print(
            f"{status} [bold]{platform.name}[/bold] ({platform.display_name})"
        )
        output_dir = escape(str(platform.output_dir(layout.dist_dir)))
        console.print(f"    Output: {output_dir}")
        console.print(f"    Commands: {platform.command_path}")
        console.print(f"    Format: {platform.envelope.kind}")


@main.command("config")
@click.pass_obj
def show_config(layout: BuildLayout) -> None:
    """Show the effective configuration for the project root."""
    console.print(f"[bold]Configuration for {escape(str(layout.root))}:[/bold]")
    for key, value in load_config(layout.root).to_dict().items():
        console.print(f"  {key}: {escape(str(value))}")
