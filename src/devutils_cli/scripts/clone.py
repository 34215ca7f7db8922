"""``clone``: git clone, then install Node dependencies when the repo has a package.json."""

import re
from pathlib import Path
from typing import Optional

import typer

from .. import shell
from ..ui import console, error
from .common import require_command

# lockfile -> tool, checked in order; npm is the fallback
LOCKFILES = (("pnpm-lock.yaml", "pnpm"), ("yarn.lock", "yarn"))


def repo_name(url: str) -> str:
    """Directory name ``git clone`` would pick for ``url``."""
    last = url.rstrip("/").split("/")[-1].split(":")[-1]
    return re.sub(r"\.git$", "", last) or "cloned-repo"


def node_package_manager(directory: Path) -> Optional[str]:
    for lockfile, tool in LOCKFILES:
        if (directory / lockfile).exists() and shell.command_exists(tool):
            return tool
    return "npm" if shell.command_exists("npm") else None


def clone(
    url: str = typer.Argument(..., help="Repository URL"),
    directory: Optional[str] = typer.Argument(None, help="Target directory (default: the repository name)"),
):
    """Clone a repository and install its dependencies."""
    target = directory or repo_name(url)
    require_command("git", "Install it with: dev install git")
    destination = Path.cwd() / target
    if destination.exists():
        error(f"Directory '{target}' already exists.")
        console.print("Please remove it or choose a different directory name.")
        raise typer.Exit(1)

    console.print(f"Cloning {url}...\n", highlight=False)
    if shell.run_interactive(["git", "clone", url, target]) != 0:
        error("git clone failed.")
        raise typer.Exit(1)
    if not destination.is_dir():
        error("Clone appeared to succeed but the directory was not created.")
        raise typer.Exit(1)

    if not (destination / "package.json").exists():
        console.print(f"\nSuccessfully cloned into '{target}'.")
        console.print("No package.json found - skipping dependency installation.")
    else:
        tool = node_package_manager(destination)
        if tool is None:
            console.print(f"\nSuccessfully cloned into '{target}'.")
            console.print("package.json found but no package manager (npm, yarn, pnpm) is installed.")
        else:
            console.print(f"\nFound package.json. Installing dependencies with {tool}...\n")
            if shell.run_interactive([tool, "install"], cwd=str(destination)) != 0:
                console.print(f"[yellow]Warning:[/yellow] {tool} install completed with errors.")
                console.print(f"You can retry manually: cd {target} && {tool} install")
            else:
                console.print("\nDependencies installed successfully.")
            console.print(f"\nSuccessfully cloned and set up '{target}'.")
    console.print(f"\nTo enter the directory, run: cd {target}")
