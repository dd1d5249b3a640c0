import datetime as dt

import pytest

from gpxsplits.util.clock import clock_time, seconds_between

UTC = dt.timezone.utc


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0:00"), (59, "0:59"), (60, "1:00"), (367, "6:07"), (3725, "62:05"), (-65, "-1:05")],
)
def test_clock_time(seconds, expected):
    assert clock_time(seconds) == expected


def test_seconds_between_uses_absolute_time():
    start = dt.datetime(2024, 3, 31, 0, 59, 30, tzinfo=UTC)
    finish = dt.datetime(2024, 3, 31, 1, 0, 30, tzinfo=UTC)  # across an EU DST switch
    assert seconds_between(start, finish) == 60


def test_seconds_between_can_be_negative():
    start = dt.datetime(2024, 1, 1, 12, 0, 10, tzinfo=UTC)
    finish = dt.datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
    assert seconds_between(start, finish) == -10


def test_seconds_between_truncates_fractions():
    start = dt.datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
    finish = start + dt.timedelta(seconds=5, milliseconds=900)
    assert seconds_between(start, finish) == 5


def test_seconds_between_floors_both_endpoints():
    start = dt.datetime(2024, 1, 1, 12, 0, 0, 600000, tzinfo=UTC)
    middle = dt.datetime(2024, 1, 1, 12, 0, 1, 200000, tzinfo=UTC)
    finish = dt.datetime(2024, 1, 1, 12, 0, 2, 0, tzinfo=UTC)

    assert seconds_between(start, middle) == 1
    assert seconds_between(middle, finish) == 1
    assert seconds_between(start, finish) == 2
