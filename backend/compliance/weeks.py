"""ISO-8601 week keys and week partitioning of sorted intervals."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Sequence, Union

from .types import WorkInterval


@dataclass(frozen=True)
class WeekBucket:
    """Index range [start, stop) of one ISO week in a sorted interval list."""
    key: str
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start

    def slice(self, intervals: Sequence[WorkInterval]) -> Sequence[WorkInterval]:
        return intervals[self.start:self.stop]


def iso_week_key(value: Union[date, datetime]) -> str:
    """
    Week key such as "2025-W01".

    The ISO week of a day is the week containing its Thursday, so the day is
    snapped to the Thursday of its Monday-based week before numbering. That
    Thursday also decides the ISO year: 2024-12-31 belongs to 2025-W01.
    """
    day = value.date() if isinstance(value, datetime) else value
    thursday = day + timedelta(days=3 - day.weekday())
    week = _ceil_div(thursday.timetuple().tm_yday, 7)
    return f"{thursday.year}-W{week:02d}"


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def partition_by_week(sorted_intervals: Sequence[WorkInterval]) -> list[WeekBucket]:
    """
    Split intervals sorted by start time into contiguous week buckets.

    With all start times in one timezone, week keys never decrease along a
    start-sorted list, so one pass yields every week exactly once, in
    chronological order.
    """
    buckets: list[WeekBucket] = []
    if not sorted_intervals:
        return buckets

    current_key = iso_week_key(sorted_intervals[0].start_time)
    current_start = 0
    for index in range(1, len(sorted_intervals)):
        key = iso_week_key(sorted_intervals[index].start_time)
        if key != current_key:
            buckets.append(WeekBucket(current_key, current_start, index))
            current_key = key
            current_start = index
    buckets.append(WeekBucket(current_key, current_start, len(sorted_intervals)))
    return buckets
