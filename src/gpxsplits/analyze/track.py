# gpxsplits/analyze/track.py
"""
Track analysis functions for gpxsplits

A single forward pass over the trackpoints accumulates the total distance
and cuts the track into fixed-distance splits. A split closes as soon as
its accumulated distance reaches the split distance, or at the last point
of the track, whichever comes first.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

from gpxsplits.analyze.geodesic import distance
from gpxsplits.errors import AnalysisError, EmptyTrackError, NonMonotonicTimeError
from gpxsplits.formats.gpx import TrackPoint, extract_trackpoints, read_gpx
from gpxsplits.util.clock import clock_time, seconds_between
from gpxsplits.util.logging import log

SPLIT_DISTANCE_M = 1000.0


@dataclass(frozen=True)
class SplitRecord:
    index: int
    duration_s: int
    distance_m: float
    speed_kmh: Optional[float]  # None when the split took no (or negative) time
    elevation_delta_m: float

    @property
    def pace(self) -> str:
        """Split duration as minutes:seconds."""
        return clock_time(self.duration_s)


@dataclass(frozen=True)
class TrackSummary:
    total_distance_m: float
    total_elapsed_s: int
    average_pace: Optional[float]  # minutes per km; None for a zero-length track


@dataclass(frozen=True)
class TrackAnalysis:
    points: int
    summary: TrackSummary
    splits: tuple[SplitRecord, ...]


def _speed_kmh(distance_m: float, duration_s: int) -> Optional[float]:
    if duration_s <= 0:
        return None
    return distance_m * 3.6 / duration_s


def _average_pace(elapsed_s: int, distance_m: float) -> Optional[float]:
    if distance_m <= 0:
        return None
    return elapsed_s / 60.0 / (distance_m / 1000.0)


def _flag_last(points: Iterator[TrackPoint]) -> Iterator[tuple[TrackPoint, bool]]:
    """Yield (point, is_last) using one point of lookahead."""
    try:
        cur = next(points)
    except StopIteration:
        return
    for nxt in points:
        yield cur, False
        cur = nxt
    yield cur, True


class TrackAccumulator:
    """
    Owns the state of one analysis run.

    Usage:
        acc = TrackAccumulator().consume(points)
        acc.summary(), acc.splits

    An accumulator consumes exactly one track; build a new one per run.
    """

    def __init__(
            self,
            split_distance_m: float = SPLIT_DISTANCE_M, *,
            allow_backwards_time: bool = False,
    ) -> None:
        if split_distance_m <= 0:
            raise ValueError(f"split_distance_m must be positive, got {split_distance_m}")
        self.split_distance_m = split_distance_m
        self.allow_backwards_time = allow_backwards_time

        self.points: list[TrackPoint] = []
        self.splits: list[SplitRecord] = []
        self.total_distance_m = 0.0
        self._consumed = False

    def consume(self, points: Iterable[TrackPoint]) -> TrackAccumulator:
        if self._consumed:
            raise AnalysisError("accumulator has already consumed a track")

        it = iter(points)
        try:
            first = next(it)
        except StopIteration:
            raise EmptyTrackError("insufficient data: track has no points") from None
        self._consumed = True
        self.points.append(first)

        split_start = first
        split_len = 0.0
        prev = first

        for cur, is_last in _flag_last(it):
            self.points.append(cur)
            self._check_time_order(prev, cur)

            step = distance(prev.lat, prev.lon, cur.lat, cur.lon)
            self.total_distance_m += step
            split_len += step

            if split_len >= self.split_distance_m or is_last:
                self._close_split(split_start, cur, split_len)
                split_len = 0.0
                split_start = cur

            prev = cur

        return self

    def _check_time_order(self, prev: TrackPoint, cur: TrackPoint) -> None:
        if cur.time >= prev.time:
            return
        n = len(self.points)
        msg = (f"trackpoint {n} at {cur.time.isoformat()} is earlier than "
               f"trackpoint {n - 1} at {prev.time.isoformat()}")
        if not self.allow_backwards_time:
            raise NonMonotonicTimeError(msg)
        log(f"Warning: {msg}; durations may be negative")

    def _close_split(self, start: TrackPoint, finish: TrackPoint, split_len: float) -> None:
        duration_s = seconds_between(start.time, finish.time)
        self.splits.append(SplitRecord(
            index=len(self.splits) + 1,
            duration_s=duration_s,
            distance_m=split_len,
            speed_kmh=_speed_kmh(split_len, duration_s),
            elevation_delta_m=finish.ele - start.ele,
        ))

    def summary(self) -> TrackSummary:
        if not self._consumed:
            raise AnalysisError("no track consumed yet")
        elapsed_s = seconds_between(self.points[0].time, self.points[-1].time)
        return TrackSummary(
            total_distance_m=self.total_distance_m,
            total_elapsed_s=elapsed_s,
            average_pace=_average_pace(elapsed_s, self.total_distance_m),
        )


def analyze_points(
        points: Iterable[TrackPoint], *,
        split_distance_m: float = SPLIT_DISTANCE_M,
        allow_backwards_time: bool = False,
) -> TrackAnalysis:
    acc = TrackAccumulator(
        split_distance_m, allow_backwards_time=allow_backwards_time,
    ).consume(points)
    return TrackAnalysis(
        points=len(acc.points),
        summary=acc.summary(),
        splits=tuple(acc.splits),
    )


def analyze_track(gpx_path: Path, **options) -> TrackAnalysis:
    """Read a GPX file and analyze its first track segment."""
    points = extract_trackpoints(read_gpx(gpx_path))
    return analyze_points(points, **options)
