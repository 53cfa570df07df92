from datetime import datetime, timezone

import pytest

from matrixclock.timelib import (
    SECS_PER_DAY,
    SECS_PER_WEEK,
    SECS_YR_2000,
    Clock,
    TimeElements,
    TimeStatus,
    break_time,
    calendar_year_to_tm,
    day_of_week,
    elapsed_days,
    elapsed_secs_this_week,
    elapsed_secs_today,
    is_leap_year,
    make_time,
    next_midnight,
    next_sunday,
    number_of_hours,
    number_of_minutes,
    number_of_seconds,
    previous_midnight,
    previous_sunday,
    tm_year_to_calendar,
    tm_year_to_y2k,
    y2k_year_to_tm,
)

SAMPLES = [0, 59, 86399, 86400, 951782400, 951868799, SECS_YR_2000, 1234567890, 1700000000, 4102444799]


class FakeMillis:
    def __init__(self):
        self.value = 0

    def __call__(self):
        return self.value


def _utc(t):
    return datetime.fromtimestamp(t, timezone.utc)


@pytest.mark.parametrize("t", SAMPLES)
def test_break_time_matches_datetime(t):
    tm = break_time(t)
    d = _utc(t)
    assert (tm_year_to_calendar(tm.year), tm.month, tm.day) == (d.year, d.month, d.day)
    assert (tm.hour, tm.minute, tm.second) == (d.hour, d.minute, d.second)
    assert tm.wday == d.isoweekday() % 7 + 1


@pytest.mark.parametrize("t", SAMPLES)
def test_make_time_round_trip(t):
    assert make_time(break_time(t)) == t


def test_year_2000_start():
    tm = break_time(SECS_YR_2000)
    assert tm_year_to_y2k(tm.year) == 0
    assert (tm.month, tm.day, tm.hour) == (1, 1, 0)


def test_leap_years_match_calendar():
    for offset in range(0, 200):
        y = 1970 + offset
        expected = (y % 4 == 0 and y % 100 != 0) or y % 400 == 0
        assert is_leap_year(offset) == expected


def test_year_conversions_are_inverse():
    assert calendar_year_to_tm(tm_year_to_calendar(42)) == 42
    assert y2k_year_to_tm(tm_year_to_y2k(55)) == 55


@pytest.mark.parametrize("t", SAMPLES)
def test_elapsed_helpers_agree_with_break_time(t):
    tm = break_time(t)
    assert number_of_seconds(t) == tm.second
    assert number_of_minutes(t) == tm.minute
    assert number_of_hours(t) == tm.hour
    assert day_of_week(t) == tm.wday
    assert elapsed_days(t) * SECS_PER_DAY + elapsed_secs_today(t) == t
    assert previous_midnight(t) <= t < next_midnight(t)
    assert break_time(previous_midnight(t)).hour == 0


@pytest.mark.parametrize("t", [SECS_YR_2000 + 12345, 1234567890, 1700000000])
def test_sunday_helpers(t):
    prev = previous_sunday(t)
    assert day_of_week(prev) == 1
    assert elapsed_secs_today(prev) == 0
    assert prev <= t < next_sunday(t)
    assert next_sunday(t) - prev == SECS_PER_WEEK
    assert elapsed_secs_this_week(t) == t - prev


def test_clock_starts_not_set_and_counts_seconds():
    ms = FakeMillis()
    clock = Clock(ms)
    assert clock.time_status() is TimeStatus.NOT_SET
    assert clock.now() == 0
    ms.value = 2500
    assert clock.now() == 2
    ms.value = 3000
    assert clock.now() == 3


def test_set_time_and_elements():
    ms = FakeMillis()
    clock = Clock(ms)
    clock.set_time(1234567890)
    assert clock.time_status() is TimeStatus.SET
    d = _utc(1234567890)
    assert clock.year() == d.year
    assert clock.month() == d.month
    assert clock.day() == d.day
    assert clock.hour() == d.hour
    assert clock.minute() == d.minute
    assert clock.second() == d.second
    ms.value = 5000
    assert clock.now() == 1234567895


def test_set_time_parts_two_and_four_digit_years():
    a = Clock(FakeMillis())
    b = Clock(FakeMillis())
    a.set_time_parts(13, 45, 30, 15, 6, 2010)
    b.set_time_parts(13, 45, 30, 15, 6, 10)
    assert a.now() == b.now()
    assert a.now() == int(datetime(2010, 6, 15, 13, 45, 30, tzinfo=timezone.utc).timestamp())


@pytest.mark.parametrize("hour,expected12,pm", [(0, 12, False), (11, 11, False), (12, 12, True), (13, 1, True), (23, 11, True)])
def test_hour_format12_and_am_pm(hour, expected12, pm):
    clock = Clock(FakeMillis())
    clock.set_time_parts(hour, 0, 0, 1, 1, 2020)
    assert clock.hour_format12() == expected12
    assert clock.is_pm() is pm
    assert clock.is_am() is (not pm)


def test_adjust_time():
    clock = Clock(FakeMillis())
    clock.set_time(1000)
    clock.adjust_time(-10)
    assert clock.now() == 990
    clock.adjust_time(25)
    assert clock.now() == 1015


def test_sync_provider_sets_time():
    ms = FakeMillis()
    clock = Clock(ms)
    clock.set_sync_provider(lambda: 1700000000)
    assert clock.now() == 1700000000
    assert clock.time_status() is TimeStatus.SET


def test_failing_provider_before_set_keeps_not_set():
    clock = Clock(FakeMillis())
    clock.set_sync_provider(lambda: 0)
    assert clock.time_status() is TimeStatus.NOT_SET


def test_failing_provider_after_set_needs_sync():
    ms = FakeMillis()
    clock = Clock(ms)
    clock.set_time(1000)
    clock.set_sync_interval(10)
    calls = []

    def provider():
        calls.append(1)
        return 0

    clock.set_sync_provider(provider)
    assert clock.time_status() is TimeStatus.NEEDS_SYNC
    count = len(calls)
    ms.value = 5000
    clock.now()
    assert len(calls) == count
    ms.value = 11000
    clock.now()
    assert len(calls) == count + 1


def test_make_time_from_elements():
    tm = TimeElements(second=0, minute=0, hour=0, day=1, month=1, year=30)
    assert make_time(tm) == SECS_YR_2000