"""Mapping and ordering of raw tracked time into WorkInterval values."""

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from dateutil import parser

from .types import WorkInterval


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept datetimes or ISO-8601 strings; empty values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return parser.isoparse(str(value))


def _required_timestamp(record: Mapping[str, Any], key: str) -> datetime:
    value = _parse_timestamp(record[key])
    if value is None:
        raise ValueError(f"{key} is required")
    return value


def _parse_duration(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


class IntervalNormalizer:
    """Builds the sorted, filtered interval lists the checkers work on."""

    @staticmethod
    def from_time_entry(record: Mapping[str, Any]) -> WorkInterval:
        """Convert a time-tracking entry (clock_out may be missing)."""
        return WorkInterval(
            id=str(record["id"]),
            user_id=str(record["uid"]),
            start_time=_required_timestamp(record, "clock_in"),
            end_time=_parse_timestamp(record.get("clock_out")),
            duration_minutes=_parse_duration(record.get("duration_minutes")),
        )

    @staticmethod
    def from_shift_time_entry(record: Mapping[str, Any]) -> WorkInterval:
        """Convert a completed shift time entry. These are always closed."""
        return WorkInterval(
            id=str(record["id"]),
            user_id=str(record["uid"]),
            start_time=_required_timestamp(record, "actual_clock_in"),
            end_time=_required_timestamp(record, "actual_clock_out"),
            duration_minutes=_parse_duration(record.get("duration_minutes")),
        )

    @staticmethod
    def sort_intervals(intervals: Iterable[WorkInterval]) -> list[WorkInterval]:
        """Return a new list ordered by start time, then id. The input is left untouched."""
        return sorted(intervals, key=lambda i: (i.start_time, i.id))

    @staticmethod
    def closed_intervals(intervals: Iterable[WorkInterval]) -> list[WorkInterval]:
        return [i for i in intervals if i.end_time is not None]

    @staticmethod
    def with_duration(intervals: Iterable[WorkInterval]) -> list[WorkInterval]:
        """Closed intervals that carry a non-zero recorded duration."""
        return [i for i in intervals if i.end_time is not None and i.duration_minutes]

    @staticmethod
    def within_window(
        intervals: Iterable[WorkInterval],
        start: datetime,
        end: datetime,
    ) -> list[WorkInterval]:
        """Intervals whose start falls in [start, end], both inclusive."""
        return [i for i in intervals if start <= i.start_time <= end]

    @staticmethod
    def partition_by_user(
        intervals: Iterable[WorkInterval],
    ) -> list[tuple[str, Sequence[WorkInterval]]]:
        """
        Group a multi-user slice by user.

        Sorts once by (user_id, start_time, id) and cuts the result into
        contiguous runs, so each run is already in start order.
        """
        ordered = sorted(intervals, key=lambda i: (i.user_id, i.start_time, i.id))
        groups: list[tuple[str, Sequence[WorkInterval]]] = []
        run_start = 0
        for index in range(1, len(ordered) + 1):
            if index == len(ordered) or ordered[index].user_id != ordered[run_start].user_id:
                groups.append((ordered[run_start].user_id, ordered[run_start:index]))
                run_start = index
        return groups
