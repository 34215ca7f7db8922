"""``get-video``: download a video as MP4 with yt-dlp."""

import typer

from .. import shell
from ..ui import error
from .common import exit_with, require_command

YT_DLP_OPTIONS = [
    "--buffer-size", "16K",
    "--keep-video",
    "--prefer-insecure",
    "--format", "mp4",
    "--ignore-errors",
    "--output", "%(title)s.%(ext)s",
]


def get_video(url: str = typer.Argument(..., help="Video URL")):
    """Download a video into the current directory using yt-dlp."""
    if not url.strip():
        error("A video URL is required.")
        raise typer.Exit(1)
    require_command("yt-dlp", "Install it with: dev install yt-dlp")
    exit_with(shell.run_interactive(["yt-dlp", *YT_DLP_OPTIONS, url]))
