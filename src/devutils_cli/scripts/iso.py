"""``iso``: the current time as an ISO 8601 timestamp."""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer

from ..ui import error


def iso_timestamp(tz_name: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """Format ``now`` (default: current time) in UTC or the IANA zone ``tz_name``.

    Raises ZoneInfoNotFoundError for an unknown zone.
    """
    moment = now or datetime.now(timezone.utc)
    if tz_name:
        moment = moment.astimezone(ZoneInfo(tz_name))
        return moment.isoformat(timespec="seconds")
    return moment.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def iso(timezone_name: Optional[str] = typer.Argument(None, metavar="TIMEZONE", help="IANA zone, e.g. Europe/Berlin")):
    """Print the current time in ISO 8601 format."""
    try:
        typer.echo(iso_timestamp(timezone_name))
    except (ZoneInfoNotFoundError, ValueError):
        error(f"Unknown time zone: {timezone_name}")
        raise typer.Exit(1)
