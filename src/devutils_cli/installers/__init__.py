"""Installer registry.

Every module in this package (other than ``common``) installs one tool and
exposes ``NAME``, ``DISPLAY_NAME``, ``HANDLERS``, ``install()``,
``is_installed()`` and ``is_eligible()``. ``installers.json`` carries display
names and the dependency graph.
"""

import importlib
import json
import logging
import pkgutil
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import ModuleType
from typing import Optional

from .. import platforms

logger = logging.getLogger(__name__)

INSTALLERS_DIR = Path(__file__).parent
METADATA_FILE = INSTALLERS_DIR / "installers.json"
_HELPER_MODULES = {"common"}


@dataclass(frozen=True)
class PlannedInstall:
    name: str
    display_name: str


def module_name(name: str) -> str:
    return name.replace("-", "_")


def available_installers() -> list[str]:
    """Names of all shipped installers, sorted."""
    names = [
        info.name.replace("_", "-")
        for info in pkgutil.iter_modules([str(INSTALLERS_DIR)])
        if not info.name.startswith("_") and info.name not in _HELPER_MODULES
    ]
    return sorted(names)


@lru_cache(maxsize=1)
def load_metadata() -> tuple:
    if not METADATA_FILE.exists():
        logger.warning("installers.json not found. Dependency resolution disabled.")
        return ()
    try:
        return tuple(json.loads(METADATA_FILE.read_text(encoding="utf-8")))
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load installers.json: %s", exc)
        return ()


def get_metadata(name: str) -> Optional[dict]:
    filename = f"{module_name(name)}.py"
    for entry in load_metadata():
        if entry.get("filename") == filename:
            return entry
    return None


def get_installer(name: str) -> Optional[ModuleType]:
    if name not in available_installers():
        return None
    return importlib.import_module(f"{__name__}.{module_name(name)}")


def display_name(name: str) -> str:
    metadata = get_metadata(name)
    if metadata and metadata.get("name"):
        return metadata["name"]
    installer = get_installer(name)
    return getattr(installer, "DISPLAY_NAME", name)


def check_is_installed(name: str) -> bool:
    installer = get_installer(name)
    if installer is None or not hasattr(installer, "is_installed"):
        return False
    return bool(installer.is_installed())


def check_is_eligible(name: str) -> bool:
    installer = get_installer(name)
    if installer is None:
        return False
    if not hasattr(installer, "is_eligible"):
        return True
    return bool(installer.is_eligible())


def resolve_dependencies(name: str, platform_type: Optional[str] = None) -> list[PlannedInstall]:
    """Dependencies of ``name`` that still need installing, in install order.

    Dependencies are visited by ascending ``priority``, filtered by their
    ``platforms`` list, and skipped when ineligible or already installed.
    Cycles are broken by ignoring a dependency that is still being resolved.
    """
    if platform_type is None:
        platform_type = platforms.detect().type
    visited: set[str] = set()
    resolving: set[str] = set()
    return _resolve(name, platform_type, visited, resolving)


def _resolve(name: str, platform_type: str, visited: set, resolving: set) -> list[PlannedInstall]:
    if name in resolving:
        logger.debug("skipping circular dependency: %s", name)
        return []
    if name in visited:
        return []

    resolving.add(name)
    result: list[PlannedInstall] = []
    metadata = get_metadata(name) or {}
    dependencies = sorted(metadata.get("depends_on", []), key=lambda d: d.get("priority", 0))

    for dep in dependencies:
        dep_name = dep["name"].removesuffix(".py").replace("_", "-")
        dep_platforms = dep.get("platforms") or []
        if dep_platforms and platform_type not in dep_platforms:
            logger.debug("skipping %s: not needed on %s", dep_name, platform_type)
            continue
        if dep_name in visited or dep_name in resolving:
            continue
        if not check_is_eligible(dep_name):
            logger.debug("skipping ineligible dependency: %s", dep_name)
            continue
        if check_is_installed(dep_name):
            logger.debug("dependency already installed: %s", dep_name)
            visited.add(dep_name)
            continue

        result.extend(_resolve(dep_name, platform_type, visited, resolving))
        if dep_name not in visited:
            result.append(PlannedInstall(dep_name, display_name(dep_name)))
            visited.add(dep_name)

    resolving.discard(name)
    return result
