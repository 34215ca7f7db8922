"""``dev status``: configuration and environment health."""

import os
import platform as _platform
import sys

from .. import config, platforms, shell
from ..pkg import package_manager
from ..ui import StepTracker, console, heading

TOOLS = (
    ("git", "Git"),
    ("docker", "Docker"),
    ("code", "VS Code"),
    ("brew", "Homebrew"),
    ("choco", "Chocolatey"),
    ("winget", "winget"),
)


def check_tool_for_tracker(tool: str, tracker: StepTracker) -> bool:
    """Check if a tool is installed and update tracker."""
    if shell.command_exists(tool):
        tracker.complete(tool, "available")
        return True
    tracker.error(tool, "not found")
    return False


def status():
    """Display current configuration and environment health."""
    current = config.load_config()
    warnings = []
    path = config.config_path()

    console.print("\n[bold]=== DevUtils CLI Status ===[/bold]")

    heading("Configuration:")
    console.print(f"  File:    {path}")
    if current:
        console.print("  Status:  [green]Valid[/green]")
        user = current.get("user") or {}
        if user:
            console.print(f"  User:    {user.get('name', '')} <{user.get('email', '')}>", highlight=False)
        if current.get("updated"):
            console.print(f"  Updated: {current['updated']}")
        if not user.get("name") or not user.get("email"):
            warnings.append("User name or email not configured")
    else:
        console.print("  Status:  [yellow]Not found[/yellow]")
        warnings.append("Configuration file not found. Run 'dev configure' to create it.")

    detected = platforms.detect()
    heading("Environment:")
    console.print(f"  OS:      {detected.label}")
    console.print(f"  Arch:    {platforms.get_arch()}")
    console.print(f"  Pkg mgr: {', '.join(package_manager.get_available()) or 'none'}")
    console.print(f"  Python:  {_platform.python_version()}")
    console.print(f"  Exec:    {sys.executable}")
    console.print(f"  CWD:     {os.getcwd()}")

    heading("Git Repository:")
    git_root = shell.run_quiet("git rev-parse --show-toplevel") if shell.command_exists("git") else ""
    if git_root:
        console.print(f"  Root:    {git_root}")
        console.print(f"  Branch:  {shell.run_quiet('git branch --show-current') or 'Unknown'}")
    else:
        console.print("  Status:  Not in a git repository")

    console.print()
    tracker = StepTracker("Available Tools")
    for tool, label in TOOLS:
        tracker.add(tool, label)
    for tool, _ in TOOLS:
        check_tool_for_tracker(tool, tracker)
    console.print(tracker.render())

    if warnings:
        heading("Warnings:")
        for warning in warnings:
            console.print(f"  [yellow]![/yellow] {warning}")
    console.print()
