"""``dev configure``: create or update the developer profile in ``~/.devutils``."""

from typing import Optional

import typer

from .. import config
from ..ui import confirm, console, error, heading


def show_config(current: dict) -> None:
    heading("Current Configuration:")
    user = current.get("user") or {}
    console.print("User:")
    console.print(f"  Name:  {user.get('name') or '(not set)'}")
    console.print(f"  Email: {user.get('email') or '(not set)'}")
    console.print(f"  URL:   {user.get('url') or '(not set)'}")
    console.print(f"\nConfig file: {config.config_path()}")
    if current.get("created"):
        console.print(f"Created:     {current['created']}")
    if current.get("updated"):
        console.print(f"Updated:     {current['updated']}")
    console.print()


def ask(question: str, default: Optional[str] = None, required: bool = False) -> str:
    answer = typer.prompt(question, default=default or "", show_default=bool(default)).strip()
    if required and not answer:
        error(f"{question.split(' ')[0]} is required.")
        raise typer.Exit(1)
    return answer


def configure(
    name: Optional[str] = typer.Option(None, "--name", help="Developer name"),
    email: Optional[str] = typer.Option(None, "--email", help="Developer email"),
    url: Optional[str] = typer.Option(None, "--url", help="Developer URL (optional)"),
    show: bool = typer.Option(False, "--show", "-s", help="Display current configuration"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing config without prompting"),
):
    """Configure the developer profile and create ~/.devutils."""
    existing = config.load_config()

    if show:
        if existing:
            show_config(existing)
        else:
            console.print("\nNo configuration found.")
            console.print(f"Run [cyan]dev configure[/cyan] to create {config.config_path()}\n")
        return

    if not (name and email):
        if existing and not force:
            console.print("\nExisting configuration found:")
            show_config(existing)
            if not confirm("Do you want to update this configuration?"):
                console.print("Configuration unchanged.")
                return

        user = (existing or {}).get("user") or {}
        console.print("\n[bold]--- Developer Profile Setup ---[/bold]\n")
        name = ask("Name (required)", name or user.get("name"), required=True)
        email = ask("Email (required)", email or user.get("email"), required=True)
        url = ask("URL (optional)", url or user.get("url"))

    updated = config.build_config(name, email, url or "", existing)
    path = config.save_config(updated)
    console.print(f"\n[green]Configuration saved to {path}[/green]")
    show_config(updated)
