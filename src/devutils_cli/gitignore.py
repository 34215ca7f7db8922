"""Marker-delimited technology sections inside a ``.gitignore``."""

from pathlib import Path
from typing import Optional

IGNORE_DIR = Path(__file__).parent / "ignore"
MARKER_TAG = "@devutils"


def available_technologies() -> list[str]:
    if not IGNORE_DIR.is_dir():
        return []
    return sorted(p.stem for p in IGNORE_DIR.glob("*.txt"))


def pattern_file(technology: str) -> Path:
    return IGNORE_DIR / f"{technology}.txt"


def read_patterns(technology: str) -> str:
    return pattern_file(technology).read_text(encoding="utf-8").strip()


def section_markers(technology: str) -> tuple[str, str]:
    return f"# === {MARKER_TAG}: {technology} ===", f"# === end: {technology} ==="


def has_patterns(content: str, technology: str) -> bool:
    start, _ = section_markers(technology)
    return any(line.strip() == start for line in content.splitlines())


def remove_patterns(content: str, technology: str) -> str:
    """Drop the section for ``technology`` and any blank lines left trailing."""
    start, end = section_markers(technology)
    kept = []
    in_section = False
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped == start:
            in_section = True
            continue
        if stripped == end:
            in_section = False
            continue
        if not in_section:
            kept.append(line)
    while kept and kept[-1] == "":
        kept.pop()
    return "\n".join(kept)


def build_section(technology: str, patterns: str) -> str:
    start, end = section_markers(technology)
    return f"\n{start}\n{patterns.strip()}\n{end}\n"


def add_patterns(content: str, technology: str, patterns: str) -> str:
    """Append a section for ``technology``. Callers remove an existing one first."""
    return content.rstrip() + build_section(technology, patterns)


def find_git_root(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start`` (default: CWD) to the first directory holding ``.git``."""
    current = Path(start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None
