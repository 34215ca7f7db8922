"""``datauri``: encode a file as a base64 data URI."""

import base64
import mimetypes
from pathlib import Path

import typer

from ..ui import error

MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".bmp": "image/bmp",
    ".avif": "image/avif",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".css": "text/css",
    ".html": "text/html",
    ".htm": "text/html",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".json": "application/json",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".xml": "application/xml",
    ".pdf": "application/pdf",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
}

TEXT_TYPES = ("application/json", "application/xml", "image/svg+xml")


def guess_mime_type(file_path: Path) -> str:
    mime = MIME_TYPES.get(file_path.suffix.lower())
    if mime:
        return mime
    guessed, _ = mimetypes.guess_type(file_path.name)
    return guessed or "application/octet-stream"


def build_data_uri(data: bytes, mime: str) -> str:
    charset = ";charset=utf-8" if mime.startswith("text/") or mime in TEXT_TYPES else ""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime}{charset};base64,{encoded}"


def datauri(file: Path = typer.Argument(..., help="File to encode")):
    """Print a file as a data URI (``data:<mime>;base64,...``)."""
    target = file.expanduser()
    if not target.is_file():
        error(f"File not found: {target}")
        raise typer.Exit(1)
    try:
        data = target.read_bytes()
    except OSError as exc:
        error(f"Could not read {target}: {exc}")
        raise typer.Exit(1)
    typer.echo(build_data_uri(data, guess_mime_type(target)), nl=False)
