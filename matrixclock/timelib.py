"""Low-level time and date functions driven by a millisecond counter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

_U32 = 0xFFFFFFFF

SECS_PER_MIN = 60
SECS_PER_HOUR = 3600
SECS_PER_DAY = SECS_PER_HOUR * 24
DAYS_PER_WEEK = 7
SECS_PER_WEEK = SECS_PER_DAY * DAYS_PER_WEEK
SECS_PER_YEAR = SECS_PER_DAY * 365
SECS_YR_2000 = 946684800

DEFAULT_SYNC_INTERVAL = 300

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class TimeStatus(IntEnum):
    """Whether the clock has been set and recently synchronised."""

    NOT_SET = 0
    NEEDS_SYNC = 1
    SET = 2


@dataclass
class TimeElements:
    """Broken-down time; ``year`` is an offset from 1970, ``wday`` 1 is Sunday."""

    second: int = 0
    minute: int = 0
    hour: int = 0
    wday: int = 0
    day: int = 0
    month: int = 0
    year: int = 0


def is_leap_year(year_offset: int) -> bool:
    """Tell whether the year ``1970 + year_offset`` is a leap year."""
    y = 1970 + year_offset
    return y > 0 and y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)


def tm_year_to_calendar(year: int) -> int:
    return year + 1970


def calendar_year_to_tm(year: int) -> int:
    return year - 1970


def tm_year_to_y2k(year: int) -> int:
    return year - 30


def y2k_year_to_tm(year: int) -> int:
    return year + 30


def _month_length(month_index: int, year_offset: int) -> int:
    if month_index == 1 and is_leap_year(year_offset):
        return 29
    return _MONTH_DAYS[month_index]


def break_time(t: int) -> TimeElements:
    """Split seconds since 1970 into calendar elements."""
    remaining = t & _U32
    tm = TimeElements()
    tm.second = remaining % 60
    remaining //= 60
    tm.minute = remaining % 60
    remaining //= 60
    tm.hour = remaining % 24
    days = remaining // 24
    tm.wday = (days + 4) % 7 + 1

    year = 0
    while True:
        length = 366 if is_leap_year(year) else 365
        if days < length:
            break
        days -= length
        year += 1
    tm.year = year

    month = 0
    while month < 12 and days >= _month_length(month, year):
        days -= _month_length(month, year)
        month += 1
    tm.month = month + 1
    tm.day = days + 1
    return tm


def make_time(tm: TimeElements) -> int:
    """Assemble calendar elements into seconds since 1970."""
    seconds = tm.year * SECS_PER_YEAR
    seconds += SECS_PER_DAY * sum(1 for y in range(tm.year) if is_leap_year(y))
    for month in range(1, tm.month):
        seconds += SECS_PER_DAY * _month_length(month - 1, tm.year)
    seconds += (tm.day - 1) * SECS_PER_DAY
    seconds += tm.hour * SECS_PER_HOUR
    seconds += tm.minute * SECS_PER_MIN
    seconds += tm.second
    return seconds & _U32


def number_of_seconds(t: int) -> int:
    return t % SECS_PER_MIN


def number_of_minutes(t: int) -> int:
    return (t // SECS_PER_MIN) % SECS_PER_MIN


def number_of_hours(t: int) -> int:
    return (t % SECS_PER_DAY) // SECS_PER_HOUR


def day_of_week(t: int) -> int:
    """Day of the week, 1 being Sunday."""
    return (t // SECS_PER_DAY + 4) % DAYS_PER_WEEK + 1


def elapsed_days(t: int) -> int:
    return t // SECS_PER_DAY


def elapsed_secs_today(t: int) -> int:
    return t % SECS_PER_DAY


def previous_midnight(t: int) -> int:
    return (t // SECS_PER_DAY) * SECS_PER_DAY


def next_midnight(t: int) -> int:
    return previous_midnight(t) + SECS_PER_DAY


def elapsed_secs_this_week(t: int) -> int:
    return elapsed_secs_today(t) + (day_of_week(t) - 1) * SECS_PER_DAY


def previous_sunday(t: int) -> int:
    return t - elapsed_secs_this_week(t)


def next_sunday(t: int) -> int:
    return previous_sunday(t) + SECS_PER_WEEK


def _monotonic_millis() -> int:
    return int(time.monotonic() * 1000) & _U32


class Clock:
    """A software clock advanced by a millisecond counter, with optional sync."""

    def __init__(self, millis: Optional[Callable[[], int]] = None) -> None:
        self._millis = millis if millis is not None else _monotonic_millis
        self._sys_time = 0
        self._prev_millis = 0
        self._next_sync_time = 0
        self._sync_interval = DEFAULT_SYNC_INTERVAL
        self._status = TimeStatus.NOT_SET
        self._provider: Optional[Callable[[], int]] = None

    def now(self) -> int:
        """Current time in seconds since 1970, syncing when due."""
        elapsed = (self._millis() - self._prev_millis) & _U32
        whole = elapsed // 1000
        self._sys_time = (self._sys_time + whole) & _U32
        self._prev_millis = (self._prev_millis + whole * 1000) & _U32

        if self._next_sync_time <= self._sys_time and self._provider is not None:
            t = self._provider()
            if t:
                self.set_time(t)
            else:
                self._next_sync_time = (self._sys_time + self._sync_interval) & _U32
                if self._status != TimeStatus.NOT_SET:
                    self._status = TimeStatus.NEEDS_SYNC
        return self._sys_time

    def set_time(self, t: int) -> None:
        self._sys_time = t & _U32
        self._next_sync_time = (t + self._sync_interval) & _U32
        self._status = TimeStatus.SET
        self._prev_millis = self._millis() & _U32

    def set_time_parts(self, hr: int, minute: int, sec: int, day: int, month: int, year: int) -> None:
        """Set the time from parts; ``year`` is four-digit or two-digit (2010 or 10)."""
        year = year - 1970 if year > 99 else year + 30
        tm = TimeElements(second=sec, minute=minute, hour=hr, day=day, month=month, year=year)
        self.set_time(make_time(tm))

    def adjust_time(self, adjustment: int) -> None:
        self._sys_time = (self._sys_time + adjustment) & _U32

    def time_status(self) -> TimeStatus:
        self.now()
        return self._status

    def set_sync_provider(self, provider: Optional[Callable[[], int]]) -> None:
        self._provider = provider
        self._next_sync_time = self._sys_time
        self.now()

    def set_sync_interval(self, interval: int) -> None:
        self._sync_interval = interval & _U32
        self._next_sync_time = (self._sys_time + self._sync_interval) & _U32

    def _elements(self, t: Optional[int]) -> TimeElements:
        return break_time(self.now() if t is None else t)

    def hour(self, t: Optional[int] = None) -> int:
        return self._elements(t).hour

    def hour_format12(self, t: Optional[int] = None) -> int:
        h = self.hour(t)
        if h == 0:
            return 12
        return h - 12 if h > 12 else h

    def is_am(self, t: Optional[int] = None) -> bool:
        return not self.is_pm(t)

    def is_pm(self, t: Optional[int] = None) -> bool:
        return self.hour(t) >= 12

    def minute(self, t: Optional[int] = None) -> int:
        return self._elements(t).minute

    def second(self, t: Optional[int] = None) -> int:
        return self._elements(t).second

    def day(self, t: Optional[int] = None) -> int:
        return self._elements(t).day

    def weekday(self, t: Optional[int] = None) -> int:
        return self._elements(t).wday

    def month(self, t: Optional[int] = None) -> int:
        return self._elements(t).month

    def year(self, t: Optional[int] = None) -> int:
        return tm_year_to_calendar(self._elements(t).year)