# gpxsplits/util/clock.py
"""
Time differencing and formatting helpers.

All arithmetic happens on the absolute UTC axis: datetimes are expected to
be tz-aware (see gpxsplits.formats.gpx.parse_time_utc), so no local
wall-clock or daylight-saving conversion can creep into a duration.
"""

from __future__ import annotations

import datetime as dt


def seconds_between(start: dt.datetime, finish: dt.datetime) -> int:
    """
    Whole seconds from `start` to `finish`.

    Both instants are floored to the whole second before subtracting, so
    consecutive differences add up to the difference of the outer instants.
    Negative when `finish` is earlier than `start`.
    """
    start = start.replace(microsecond=0)
    finish = finish.replace(microsecond=0)
    return int((finish - start).total_seconds())


def clock_time(seconds: int) -> str:
    """Render a duration as minutes:seconds, e.g. 367 -> "6:07"."""
    sign = "-" if seconds < 0 else ""
    minutes, secs = divmod(abs(int(seconds)), 60)
    return f"{sign}{minutes}:{secs:02d}"
