# gpxsplits/formats/gpx.py
"""
GPX helpers for gpxsplits

This module is intentionally format-focused:
- GPX namespace handling
- safely reading an ElementTree
- turning <trkpt> elements into TrackPoint records

Analysis (distances, splits, statistics) lives in gpxsplits.analyze.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from pathlib import Path
from xml.etree import ElementTree as ET

from gpxsplits.errors import InvalidGpxError
from gpxsplits.util.logging import log

# GPX 1.1 default namespace
GPX_NS = {"gpx": "http://www.topografix.com/GPX/1/1"}


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    ele: float
    time: _dt.datetime


def _namespaces(root: ET.Element) -> dict[str, str]:
    """
    Namespace map for `root`.

    GPX 1.0 files use a different URI than 1.1; take whatever the root
    element declares so both work with the same "gpx:" prefixed paths.
    """
    if root.tag.startswith("{"):
        return {"gpx": root.tag[1:].split("}", 1)[0]}
    return GPX_NS


def parse_time_utc(text: str) -> _dt.datetime:
    """
    Parse an ISO-8601 timestamp commonly found in GPX <time> nodes.

    Expected examples:
      - "2026-01-02T21:14:44Z"
      - "2026-01-02T21:14:44.123Z"
      - "2026-01-02T21:14:44+00:00"

    Raises:
      InvalidGpxError if the text is empty or not ISO-8601.
    """
    s = (text or "").strip()
    if not s:
        raise InvalidGpxError("empty <time> value")

    # GPX times commonly use Z for UTC.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    try:
        dt = _dt.datetime.fromisoformat(s)
    except ValueError as e:
        raise InvalidGpxError(f"unparseable <time> value: {text!r}") from e

    # Ensure tz-aware; if naive, assume UTC (conservative for GPX sources)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)

    return dt.astimezone(_dt.timezone.utc)


def read_gpx(path: Path) -> ET.ElementTree:
    """
    Read a GPX file into an ElementTree.

    Raises:
      InvalidGpxError for malformed XML, OSError for unreadable files.
    """
    try:
        return ET.parse(path)
    except ET.ParseError as e:
        raise InvalidGpxError(f"{path}: {e}") from e


def _float_field(value: str | None, what: str, n: int) -> float:
    if value is None or not value.strip():
        raise InvalidGpxError(f"trackpoint {n}: missing {what}")
    try:
        return float(value)
    except ValueError as e:
        raise InvalidGpxError(f"trackpoint {n}: bad {what} {value!r}") from e


def extract_trackpoints(tree: ET.ElementTree) -> list[TrackPoint]:
    """
    Extract ordered trackpoints from the first <trkseg> of a GPX tree.

    Every point must carry lat, lon, <ele> and <time>; a missing or
    unparseable field aborts extraction with InvalidGpxError.
    """
    root = tree.getroot()
    ns = _namespaces(root)

    segments = root.findall(".//gpx:trk/gpx:trkseg", ns)
    if not segments:
        raise InvalidGpxError("no <trkseg> found")
    if len(segments) > 1:
        log(f"GPX has {len(segments)} track segments; using the first only")

    pts: list[TrackPoint] = []
    for n, trkpt in enumerate(segments[0].findall("gpx:trkpt", ns), start=1):
        lat = _float_field(trkpt.get("lat"), "lat", n)
        lon = _float_field(trkpt.get("lon"), "lon", n)
        if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
            raise InvalidGpxError(f"trackpoint {n}: lat/lon out of range ({lat}, {lon})")
        ele = _float_field(trkpt.findtext("gpx:ele", namespaces=ns), "<ele>", n)

        t = trkpt.findtext("gpx:time", namespaces=ns)
        if t is None:
            raise InvalidGpxError(f"trackpoint {n}: missing <time>")
        time = parse_time_utc(t)

        pts.append(TrackPoint(lat=lat, lon=lon, ele=ele, time=time))

    return pts
