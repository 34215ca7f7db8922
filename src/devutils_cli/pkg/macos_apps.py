"""Application bundle lookups on macOS."""

from pathlib import Path
from typing import Optional

APPLICATION_DIRS = (Path("/Applications"), Path.home() / "Applications")


def get_app_bundle_path(app_name: str) -> Optional[Path]:
    bundle = app_name if app_name.endswith(".app") else f"{app_name}.app"
    for base in APPLICATION_DIRS:
        candidate = base / bundle
        if candidate.exists():
            return candidate
    return None


def is_app_installed(app_name: str) -> bool:
    return get_app_bundle_path(app_name) is not None
