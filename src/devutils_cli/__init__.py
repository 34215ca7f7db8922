"""
devutils CLI - cross-platform developer workstation setup

Usage:
    dev install docker
    dev install --list
    dev ignore python
    dev status

Script commands replace common shell aliases:
    dev git-push "message"
    dev ports --listening
    dev local-ip
"""

import os
import sys

import typer
from rich.align import Align
from rich.text import Text
from typer.core import TyperGroup

from . import scripts
from .commands import configure, identity, ignore, install, setup_cmd, status, version
from .log import configure_logging
from .ui import console, err_console

BANNER = """
██████╗ ███████╗██╗   ██╗
██╔══██╗██╔════╝██║   ██║
██║  ██║█████╗  ██║   ██║
██║  ██║██╔══╝  ╚██╗ ██╔╝
██████╔╝███████╗ ╚████╔╝ 
╚═════╝ ╚══════╝  ╚═══╝  
"""

TAGLINE = "devutils - Developer workstation setup and everyday shell helpers"

NO_BANNER_ENV = "DEVUTILS_NO_BANNER"


def banner_enabled() -> bool:
    return not os.environ.get(NO_BANNER_ENV) and console.is_terminal


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        if banner_enabled():
            show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="dev",
    help="Install developer tools, manage .gitignore files and run cross-platform shell helpers",
    add_completion=True,
    invoke_without_command=True,
    no_args_is_help=False,
    cls=BannerGroup,
)


def show_banner():
    """Display the ASCII art banner."""
    banner_lines = BANNER.strip().split("\n")
    colors = ["bright_blue", "blue", "cyan", "bright_cyan", "white", "bright_white"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        color = colors[i % len(colors)]
        styled_banner.append(line + "\n", style=color)

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Show banner when no subcommand is provided."""
    configure_logging(verbose=verbose, quiet=quiet)
    if no_color or os.environ.get("NO_COLOR"):
        console.no_color = True
        err_console.no_color = True

    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        if banner_enabled():
            show_banner()
        console.print(Align.center("[dim]Run 'dev --help' for usage information[/dim]"))
        console.print()


app.command("install")(install.install)
app.command("ignore")(ignore.ignore)
app.command("setup")(setup_cmd.setup)
app.command("configure")(configure.configure)
app.add_typer(identity.identity_app, name="identity")
app.command("status")(status.status)
app.command("version")(version.version)
app.command("update")(version.update)
scripts.register(app)


def main():
    app()


if __name__ == "__main__":
    main()
