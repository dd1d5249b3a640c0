# gpxsplits/util/paths.py
from __future__ import annotations

import re
from pathlib import Path

_slug_bad = re.compile(r"[^a-z0-9]+")

def ensure_dir(path: Path) -> None:
    """Ensure a directory exists."""
    path.mkdir(parents=True, exist_ok=True)

def slugify(text: str, *, default: str = "untitled") -> str:
    """Create a path-safe slug (lowercase, a-z0-9 and single underscores)."""
    s = (text or "").strip().lower()
    s = _slug_bad.sub("_", s).strip("_")
    return s or default

def report_path(out_dir: Path, gpx_path: Path) -> Path:
    """Where the text report for `gpx_path` is written under `out_dir`."""
    return out_dir / f"{slugify(gpx_path.stem)}_splits.txt"
