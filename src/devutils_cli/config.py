"""User profile stored as JSON in ``~/.devutils``."""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from . import platforms

logger = logging.getLogger(__name__)

CONFIG_ENV = "DEVUTILS_CONFIG"


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return platforms.get_home_dir() / ".devutils"


def load_config() -> Optional[dict]:
    """Return the parsed config, or None when missing or unreadable."""
    path = config_path()
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def save_config(config: dict) -> Path:
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(config, fh, indent=2)
        fh.write("\n")
    logger.debug("wrote config %s", path)
    return path


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def build_config(name: str, email: str, url: str = "", existing: Optional[dict] = None) -> dict:
    """Merge a new user profile into ``existing``, keeping its creation time."""
    config = dict(existing or {})
    stamp = now_iso()
    config["user"] = {"name": name, "email": email, "url": url or ""}
    config.setdefault("created", stamp)
    config["updated"] = stamp
    return config
