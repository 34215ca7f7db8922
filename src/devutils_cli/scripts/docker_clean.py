"""``docker-clean``: remove all containers, images and volumes."""

import typer

from .. import shell
from ..ui import confirm, console
from .common import require_command

STEPS = (
    ("containers", "docker ps -aq", "docker rm -f"),
    ("images", "docker images -q", "docker rmi -f"),
    ("volumes", "docker volume ls -q", "docker volume rm -f"),
)


def docker_clean(force: bool = typer.Option(False, "--force", "-f", help="Skip the confirmation prompt")):
    """Remove ALL Docker containers, images and volumes."""
    require_command("docker", "Install Docker with: dev install docker")
    console.print("[yellow]This removes every Docker container, image and volume on this machine.[/yellow]")
    if not force and not confirm("Continue?"):
        console.print("Cancelled.")
        return

    failures = 0
    for label, list_cmd, remove_cmd in STEPS:
        ids = sorted(set(shell.run_quiet(list_cmd).split()))
        if not ids:
            console.print(f"No {label} to remove.")
            continue
        result = shell.run_command(f"{remove_cmd} {' '.join(ids)}")
        if result.ok:
            console.print(f"[green]Removed {len(ids)} {label}.[/green]")
        else:
            failures += 1
            console.print(f"[red]Failed to remove some {label}:[/red] {result.stderr.strip()}")
    if failures:
        raise typer.Exit(1)
