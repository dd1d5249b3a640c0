import datetime as dt
from pathlib import Path

import pytest

from gpxsplits.formats.gpx import TrackPoint

T0 = dt.datetime(2024, 5, 1, 8, 0, 0, tzinfo=dt.timezone.utc)

GPX_HEAD = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>test</name>
"""
GPX_TAIL = """  </trk>
</gpx>
"""


def pt(lat, lon, ele, seconds) -> TrackPoint:
    """TrackPoint `seconds` after T0."""
    return TrackPoint(lat=lat, lon=lon, ele=ele, time=T0 + dt.timedelta(seconds=seconds))


def gpx_text(*segments) -> str:
    body = []
    for points in segments:
        body.append("    <trkseg>\n")
        for p in points:
            stamp = p.time.strftime("%Y-%m-%dT%H:%M:%SZ")
            body.append(
                f'      <trkpt lat="{p.lat}" lon="{p.lon}">'
                f"<ele>{p.ele}</ele><time>{stamp}</time></trkpt>\n"
            )
        body.append("    </trkseg>\n")
    return GPX_HEAD + "".join(body) + GPX_TAIL


@pytest.fixture
def equator_track() -> list[TrackPoint]:
    """25 points heading east along the equator, ~122 m and 37 s apart."""
    return [pt(0.0, i * 0.0011, 10.0 + i, i * 37) for i in range(25)]


@pytest.fixture
def write_gpx(tmp_path: Path):
    def _write(points, name="track.gpx", *more_segments) -> Path:
        path = tmp_path / name
        path.write_text(gpx_text(points, *more_segments), encoding="utf-8")
        return path
    return _write
