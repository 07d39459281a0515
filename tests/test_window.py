from __future__ import annotations

import pytest

from bikeflow.index.window import (
    ALL_DAY,
    ANY_TIME,
    InvalidTimeFilter,
    RangeSpec,
    query,
    validate_time_filter,
)


def test_any_time_selects_every_bucket():
    window = query(ANY_TIME)
    assert window == ALL_DAY
    assert len(window) == 1440
    assert list(window.minutes()) == list(range(1440))


def test_window_wraps_past_midnight():
    window = query(30, 60)
    assert window.intervals == ((1410, 1440), (0, 90))
    assert window.wraps
    assert list(window.minutes()) == list(range(1410, 1440)) + list(range(0, 90))


def test_window_without_wrap():
    window = query(700, 60)
    assert window.intervals == ((640, 760),)
    assert not window.wraps
    assert 640 in window
    assert 759 in window
    assert 760 not in window


def test_window_is_half_open_around_center():
    window = query(700)
    assert len(window) == 120
    assert 700 - 60 in window
    assert 700 + 60 not in window


def test_window_ending_exactly_at_midnight_has_single_interval():
    window = query(1380, 60)
    assert window.intervals == ((1320, 1440),)
    assert len(window) == 120


def test_window_starting_at_midnight():
    assert query(60, 60).intervals == ((0, 120),)


@pytest.mark.parametrize("center", [0, 1, 59, 719, 1439])
def test_each_bucket_visited_once(center):
    minutes = list(query(center, 60).minutes())
    assert len(minutes) == len(set(minutes)) == 120


@pytest.mark.parametrize("bad", [-2, 1440, 5000, "30", 30.0, None, True])
def test_invalid_filter_fails_fast(bad):
    with pytest.raises(InvalidTimeFilter):
        query(bad)


def test_invalid_filter_is_a_value_error():
    with pytest.raises(ValueError):
        validate_time_filter(-5)


@pytest.mark.parametrize("radius", [0, -1, 720, 1440])
def test_radius_must_leave_a_proper_window(radius):
    with pytest.raises(ValueError):
        query(100, radius)


def test_custom_radius():
    assert query(100, 15).intervals == ((85, 115),)


def test_range_spec_len_and_contains():
    window = RangeSpec(intervals=((1430, 1440), (0, 5)))
    assert len(window) == 15
    assert 1435 in window
    assert 3 in window
    assert 100 not in window


@pytest.mark.parametrize("radius", [60.9, 60.0, "60", True, None])
def test_radius_must_be_an_int(radius):
    with pytest.raises(ValueError):
        query(100, radius)
