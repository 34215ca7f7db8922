"""``git-push``: stage everything, commit and push the current branch."""

import typer

from .. import shell
from ..ui import console, error
from .common import exit_with, require_command


def has_upstream() -> bool:
    return shell.run_command("git rev-parse --abbrev-ref --symbolic-full-name @{u}").ok


def git_push(message: str = typer.Argument(..., help="Commit message")):
    """Add all changes, commit with MESSAGE and push to the current branch."""
    require_command("git")
    if not message.strip():
        error("Commit message cannot be empty.")
        raise typer.Exit(1)
    if shell.run_quiet("git rev-parse --is-inside-work-tree") != "true":
        error("Not inside a git repository.")
        raise typer.Exit(1)

    exit_with(shell.run_interactive(["git", "add", "-A"]))
    if not shell.run_quiet("git status --porcelain"):
        console.print("Nothing to commit, working tree clean.")
        return
    exit_with(shell.run_interactive(["git", "commit", "-m", message]))

    branch = shell.run_quiet("git branch --show-current")
    if not branch:
        error("Cannot push from a detached HEAD.")
        raise typer.Exit(1)
    if has_upstream():
        exit_with(shell.run_interactive(["git", "push"]))
    else:
        exit_with(shell.run_interactive(["git", "push", "--set-upstream", "origin", branch]))
