"""``dp``: running Docker containers as a compact table."""

import typer
from rich.table import Table

from .. import shell
from ..ui import console, error
from .common import require_command

PS_FORMAT = "{{.ID}}\t{{.Names}}\t{{.Ports}}"


def parse_ps(output: str) -> list[tuple[str, str, str]]:
    rows = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t")
        parts += [""] * (3 - len(parts))
        rows.append((parts[0], parts[1], parts[2]))
    return rows


def dp():
    """List running Docker containers (ID, name, ports)."""
    require_command("docker", "Install Docker with: dev install docker")
    result = shell.run_command(f"docker ps --format '{PS_FORMAT}'")
    if not result.ok:
        error(result.stderr.strip() or "docker ps failed. Is the Docker daemon running?")
        raise typer.Exit(1)

    rows = parse_ps(result.stdout)
    if not rows:
        console.print("No running containers.")
        return

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("CONTAINER ID")
    table.add_column("NAMES")
    table.add_column("PORTS")
    for row in rows:
        table.add_row(*row)
    console.print(table)
