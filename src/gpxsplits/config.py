"""
gpxsplits configuration loader

This module centralizes *all* configuration handling for gpxsplits.

Design goals:
- Keep the CLI Unix-friendly: flags override everything.
- Provide sensible defaults if no config exists.
- Allow per-machine config without committing personal paths:
    ~/.config/gpxsplits/config.toml
- Allow repo-local config:
    <repo_root>/config/config.toml
- Allow environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by gpx_analyze)
2) Environment variables (GPXSPLITS_*)
3) User config: ~/.config/gpxsplits/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults

Example config.toml:

    [paths]
    work_root = "~/GPS/_work"
    report_root = "~/GPS/_work/_reports"

    [analyze]
    split_distance_m = 1000
    allow_backwards_time = false
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from gpxsplits.errors import ConfigError

DEFAULT_SPLIT_DISTANCE_M = 1000.0


# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    - A missing file returns an empty dict (missing config is normal).
    - An existing but invalid file raises ConfigError with file context.
    """
    if not path.is_file():
        return {}

    try:
        return tomllib.loads(path.read_text(encoding="utf-8")) or {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_path(v: Any) -> Optional[Path]:
    if v is None:
        return None
    if isinstance(v, Path):
        return v.expanduser()
    if isinstance(v, str):
        return Path(v).expanduser()
    return None


def _as_bool(v: Any, default: bool) -> bool:
    """
    Coerce loosely-typed config values into booleans.

    Accepts common truthy / falsy strings so TOML and environment
    variables behave the same way.
    """
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("true", "yes", "y", "1", "on"):
            return True
        if s in ("false", "no", "n", "0", "off"):
            return False
    return default


def _as_distance(v: Any, origin: str) -> float:
    """Coerce a split distance; must be a positive number."""
    try:
        d = float(v)
    except (TypeError, ValueError):
        raise ConfigError(f"split_distance_m from {origin} is not a number: {v!r}") from None
    if d <= 0:
        raise ConfigError(f"split_distance_m from {origin} must be positive, got {d}")
    return d


# ---------------------------------------------------------------------------
# Repo discovery + defaults
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the repo root, marked by a
    `config/` directory.
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


def default_work_root() -> Path:
    return Path.home() / "GPS" / "_work"


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AnalyzeConfig:
    """Options passed through to gpxsplits.analyze.track.analyze_track."""

    split_distance_m: float = DEFAULT_SPLIT_DISTANCE_M
    allow_backwards_time: bool = False


@dataclass(frozen=True)
class GPXSplitsPaths:
    work_root: Path
    report_root: Path


@dataclass(frozen=True)
class GPXSplitsConfig:
    """
    Fully merged configuration.

    Attributes:
    - paths: resolved filesystem layout
    - analyze: analysis options
    - source: provenance map showing where each value came from
    """

    paths: GPXSplitsPaths
    analyze: AnalyzeConfig
    source: dict[str, str]


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> GPXSplitsConfig:
    """
    Load, merge, and normalize all gpxsplits configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "gpxsplits" / "config.toml"

    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    work_root = default_work_root()
    report_root: Optional[Path] = None
    split_distance_m = DEFAULT_SPLIT_DISTANCE_M
    allow_backwards_time = False

    src = {
        "paths.work_root": "default",
        "paths.report_root": "default",
        "analyze.split_distance_m": "default",
        "analyze.allow_backwards_time": "default",
    }

    # ------------------------------------------------------------------
    # Repo + user file overrides (user wins)
    # ------------------------------------------------------------------
    for cfg, label, cfg_path in ((repo_cfg, "repo", repo_config_path),
                                 (user_cfg, "user", user_config_path)):
        origin = f"{label}:{cfg_path}"

        v = _as_path(_deep_get(cfg, "paths.work_root"))
        if v is not None:
            work_root = v
            src["paths.work_root"] = origin

        v = _as_path(_deep_get(cfg, "paths.report_root"))
        if v is not None:
            report_root = v
            src["paths.report_root"] = origin

        raw = _deep_get(cfg, "analyze.split_distance_m")
        if raw is not None:
            split_distance_m = _as_distance(raw, origin)
            src["analyze.split_distance_m"] = origin

        raw = _deep_get(cfg, "analyze.allow_backwards_time")
        if raw is not None:
            allow_backwards_time = _as_bool(raw, allow_backwards_time)
            src["analyze.allow_backwards_time"] = origin

    # ------------------------------------------------------------------
    # Environment variable overrides (highest non-CLI precedence)
    # ------------------------------------------------------------------
    env = os.environ
    if env.get("GPXSPLITS_WORK_ROOT"):
        work_root = Path(env["GPXSPLITS_WORK_ROOT"]).expanduser()
        src["paths.work_root"] = "env:GPXSPLITS_WORK_ROOT"
    if env.get("GPXSPLITS_REPORT_ROOT"):
        report_root = Path(env["GPXSPLITS_REPORT_ROOT"]).expanduser()
        src["paths.report_root"] = "env:GPXSPLITS_REPORT_ROOT"
    if env.get("GPXSPLITS_SPLIT_DISTANCE_M"):
        split_distance_m = _as_distance(env["GPXSPLITS_SPLIT_DISTANCE_M"],
                                        "env:GPXSPLITS_SPLIT_DISTANCE_M")
        src["analyze.split_distance_m"] = "env:GPXSPLITS_SPLIT_DISTANCE_M"
    if env.get("GPXSPLITS_ALLOW_BACKWARDS_TIME"):
        allow_backwards_time = _as_bool(env["GPXSPLITS_ALLOW_BACKWARDS_TIME"],
                                        allow_backwards_time)
        src["analyze.allow_backwards_time"] = "env:GPXSPLITS_ALLOW_BACKWARDS_TIME"

    # Derive report folder if not configured explicitly
    if report_root is None:
        report_root = work_root / "_reports"

    return GPXSplitsConfig(
        paths=GPXSplitsPaths(
            work_root=work_root.expanduser(),
            report_root=report_root.expanduser(),
        ),
        analyze=AnalyzeConfig(
            split_distance_m=split_distance_m,
            allow_backwards_time=allow_backwards_time,
        ),
        source=src,
    )
