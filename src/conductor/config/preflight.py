"""Preflight checks to validate the source tree and host CLIs."""

from rich.markup import escape

from conductor.commands import MetadataError, load_commands
from conductor.config.schema import BuildLayout, UnsafeOutputDirError
from conductor.console import console
from conductor.platforms import PLATFORMS


def check_metadata(layout: BuildLayout) -> bool:
    """Validate the command metadata parses and every prompt file exists."""
    try:
        commands = load_commands(layout.metadata_file)
    except FileNotFoundError:
        console.print(
            f"[red]✗[/red] Metadata not found: {escape(str(layout.metadata_file))}"
        )
        return False
    except MetadataError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        return False

    console.print(f"[green]✓[/green] {len(commands)} command(s) in metadata")

    missing = [
        command
        for command in commands
        if not (layout.prompts_dir / command.source_file).is_file()
    ]
    for command in missing:
        source = layout.prompts_dir / command.source_file
        console.print(
            f"  [yellow]⚠[/yellow] {escape(command.name)}: "
            f"[dim]{escape(str(source))} missing (will be skipped)[/dim]"
        )
    return True


def check_sources(layout: BuildLayout) -> bool:
    """Check the shared context file, templates and platform manifests exist."""
    ok = True

    context_file = escape(str(layout.context_file))
    if layout.context_file.is_file():
        console.print(f"[green]✓[/green] Context file: {context_file}")
    else:
        console.print(f"[red]✗[/red] Context file missing: {context_file}")
        ok = False

    templates_dir = escape(str(layout.templates_dir))
    if layout.templates_dir.is_dir():
        console.print(f"[green]✓[/green] Templates: {templates_dir}")
    else:
        console.print(f"[red]✗[/red] Templates missing: {templates_dir}")
        ok = False

    for platform in PLATFORMS:
        if not platform.manifest_source:
            continue
        manifest = layout.platforms_dir / platform.manifest_source
        if manifest.is_file():
            console.print(f"[green]✓[/green] {platform.display_name} manifest")
        else:
            console.print(
                f"[red]✗[/red] {platform.display_name} manifest missing: "
                f"{escape(str(manifest))}"
            )
            ok = False

    return ok


def check_output_dir(layout: BuildLayout) -> bool:
    """Check the output directory does not overlap the project inputs."""
    try:
        layout.check_output_dir()
    except UnsafeOutputDirError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        return False

    console.print(f"[green]✓[/green] Output: {escape(str(layout.dist_dir))}")
    return True


def check_hosts() -> bool:
    """Report which host CLIs are installed. Informational only."""
    console.print("\n[bold]Host CLIs:[/bold]")

    for platform in PLATFORMS:
        if platform.is_installed():
            console.print(
                f"  [green]✓[/green] {platform.display_name} "
                f"([cyan]{platform.cli_command}[/cyan])"
            )
        else:
            console.print(
                f"  [dim]✗[/dim] {platform.display_name} - "
                f"[dim]{platform.install_info}[/dim]"
            )

    return True


def run_all_checks(layout: BuildLayout) -> bool:
    """Run all preflight checks."""
    console.print("[bold]Running preflight checks...[/bold]\n")

    results = [
        check_metadata(layout),
        check_sources(layout),
        check_output_dir(layout),
        check_hosts(),
    ]
    all_passed = all(results)

    if all_passed:
        console.print("\n[bold green]All preflight checks passed![/bold green]")
    else:
        console.print("\n[bold red]Some preflight checks failed.[/bold red]")

    return all_passed
