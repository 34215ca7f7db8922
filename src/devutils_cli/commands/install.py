"""``dev install``: install a tool and its missing dependencies."""

import logging
import sys
from typing import Optional

import typer

from .. import installers
from ..errors import DevutilsError
from ..installers import PlannedInstall
from ..log import configure_logging
from ..ui import StepTracker, confirm, console, error, failure_panel, heading, rule, select_with_arrows

logger = logging.getLogger(__name__)


def list_installers() -> None:
    names = installers.available_installers()
    if not names:
        console.print("\nNo install scripts available.\n")
        return
    heading("Available install scripts:")
    for name in names:
        suffix = "" if installers.check_is_eligible(name) else " [dim](not available on this platform)[/dim]"
        console.print(f"  [cyan]{name}[/cyan]{suffix}")
    console.print("\nUsage: dev install <name>\n")


def pick_installer() -> str:
    options = {name: installers.display_name(name) for name in installers.available_installers()}
    return select_with_arrows(options, "Choose a tool to install")


def build_plan(name: str) -> list[PlannedInstall]:
    """Dependencies followed by the target, without duplicates."""
    planned = installers.resolve_dependencies(name) + [PlannedInstall(name, installers.display_name(name))]
    seen = set()
    plan = []
    for item in planned:
        if item.name in seen:
            continue
        seen.add(item.name)
        plan.append(item)
    return plan


def run_plan(plan: list[PlannedInstall], force: bool) -> tuple[int, int]:
    tracker = StepTracker("Installation Summary")
    for item in plan:
        tracker.add(item.name, item.display_name)

    succeeded = failed = 0
    for index, item in enumerate(plan):
        console.print()
        rule(50)
        console.print(f"[bold]Installing {item.display_name}...[/bold]")
        rule(50)
        tracker.start(item.name)
        try:
            installers.get_installer(item.name).install()
        except DevutilsError as exc:
            logger.debug("install of %s failed", item.name, exc_info=True)
            failed += 1
            tracker.error(item.name, "failed")
            console.print(failure_panel(str(exc), title=f"Failed to install {item.display_name}"))
            remaining = index < len(plan) - 1
            if remaining and not force and not confirm("Continue with remaining installations?"):
                console.print("Installation cancelled.")
                break
            continue
        succeeded += 1
        tracker.complete(item.name, "done")

    for item in plan:
        if tracker.status(item.name) == "pending":
            tracker.skip(item.name, "cancelled")
    console.print()
    console.print(tracker.render())
    return succeeded, failed


def install(
    name: Optional[str] = typer.Argument(None, help="Name of the tool to install (see --list)"),
    list_all: bool = typer.Option(False, "--list", help="List all available install scripts"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the installation plan without running it"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompts"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed output during installation"),
):
    """Install a development tool, resolving its dependencies first."""
    if verbose:
        configure_logging(verbose=True)

    if list_all:
        list_installers()
        return

    if not name:
        if not sys.stdin.isatty():
            error("No package specified.")
            console.print("Usage: dev install <name>")
            console.print("Run [cyan]dev install --list[/cyan] to see available options.")
            raise typer.Exit(1)
        name = pick_installer()

    if name not in installers.available_installers():
        error(f'Unknown package "{name}".')
        console.print("Run [cyan]dev install --list[/cyan] to see available options.")
        raise typer.Exit(1)

    label = installers.display_name(name)
    console.print(f"\nChecking {label}...")

    if installers.check_is_installed(name):
        console.print(f"[green]{label} is already installed.[/green]")
        return

    if not installers.check_is_eligible(name):
        console.print(f"[yellow]{label} is not available for this platform.[/yellow]")
        return

    logger.debug("resolving dependencies for %s", name)
    plan = build_plan(name)

    if len(plan) > 1:
        console.print("\nThe following will be installed:")
        for item in plan:
            console.print(f"  - {item.display_name}")
    else:
        console.print(f"\nPreparing to install: {label}")

    if dry_run:
        console.print("\n[Dry run mode - no changes will be made]", style="yellow", markup=False)
        return

    if not force and not confirm("Proceed with installation?"):
        console.print("Installation cancelled.")
        return

    succeeded, failed = run_plan(plan, force)

    console.print(f"\nSuccessful: {succeeded}")
    if failed:
        console.print(f"[red]Failed: {failed}[/red]")
        raise typer.Exit(1)
