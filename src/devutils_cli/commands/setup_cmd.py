"""``dev setup``: install the tools the CLI itself depends on."""

from dataclasses import dataclass

import typer

from .. import installers, platforms, shell
from ..errors import DevutilsError
from ..ui import console, confirm, failure_panel, heading, rule


@dataclass(frozen=True)
class EssentialTool:
    name: str
    command: str
    description: str
    installer: str


ESSENTIAL_TOOLS = (
    EssentialTool("git", "git", "Version control system", "git"),
    EssentialTool("ssh-keygen", "ssh-keygen", "SSH key generation", "openssh"),
    EssentialTool("gpg", "gpg", "GPG encryption and signing", "gpg"),
    EssentialTool("curl", "curl", "Data transfer tool", "curl"),
)


def tool_statuses() -> list[tuple[EssentialTool, bool]]:
    return [(tool, shell.command_exists(tool.command)) for tool in ESSENTIAL_TOOLS]


def show_statuses(statuses) -> None:
    heading("Essential Tools:", 50)
    for tool, present in statuses:
        status = "[green]✓ Installed[/green]" if present else "[red]✗ Missing[/red]  "
        console.print(f"  {tool.name:<15} {status}   [dim]{tool.description}[/dim]")
    console.print()


def install_tool(tool: EssentialTool) -> bool:
    installer = installers.get_installer(tool.installer)
    try:
        installer.install()
    except DevutilsError as exc:
        console.print(failure_panel(str(exc), title=f"Failed to install {tool.name}"))
        return False
    return shell.command_exists(tool.command)


def setup(
    force: bool = typer.Option(False, "--force", help="Install without prompting"),
    check: bool = typer.Option(False, "--check", help="Check tool status without installing"),
):
    """Install essential tools required by the dev CLI."""
    statuses = tool_statuses()

    if check:
        show_statuses(statuses)
        if not all(present for _, present in statuses):
            console.print("Run [cyan]dev setup[/cyan] to install missing tools.\n")
        return

    current = platforms.detect()
    console.print("\n[bold]=== DevUtils CLI Setup ===[/bold]\n")
    console.print(f"Platform: {current.type}")
    console.print(f"Package Manager: {current.package_manager or 'unknown'}")
    show_statuses(statuses)

    missing = [tool for tool, present in statuses if not present]
    if not missing:
        console.print("[green]All essential tools are already installed.[/green]\n")
        return

    console.print(f"Missing {len(missing)} tool(s): {', '.join(t.name for t in missing)}\n")
    if not force and not confirm("Install missing tools?"):
        console.print("Setup cancelled.\n")
        return

    installed = failed = 0
    for tool in missing:
        console.print(f"Installing {tool.name}...")
        if install_tool(tool):
            installed += 1
            console.print(f"  [green]{tool.name} installed successfully.[/green]\n")
        else:
            failed += 1
            console.print(f"  [red]{tool.name} installation failed.[/red]\n")

    rule(50)
    console.print(f"\nSetup complete: {installed} installed, {failed} failed.\n")
    if installed:
        show_statuses(tool_statuses())
    if failed:
        raise typer.Exit(1)
