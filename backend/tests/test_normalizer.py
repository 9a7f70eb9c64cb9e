import pytest
from datetime import datetime, timezone

from compliance.normalizer import IntervalNormalizer


class TestRecordMapping:

    def test_time_entry_with_string_timestamps(self):
        interval = IntervalNormalizer.from_time_entry({
            "id": "te-1",
            "uid": "user-1",
            "clock_in": "2025-01-06T08:00:00Z",
            "clock_out": "2025-01-06T16:30:00Z",
            "duration_minutes": 510,
        })

        assert interval.id == "te-1"
        assert interval.user_id == "user-1"
        assert interval.start_time == datetime(2025, 1, 6, 8, 0, tzinfo=timezone.utc)
        assert interval.end_time == datetime(2025, 1, 6, 16, 30, tzinfo=timezone.utc)
        assert interval.duration_minutes == 510
        assert interval.is_closed

    def test_running_time_entry_stays_open(self):
        interval = IntervalNormalizer.from_time_entry({
            "id": "te-2",
            "uid": "user-1",
            "clock_in": datetime(2025, 1, 6, 8, 0),
            "clock_out": None,
        })

        assert interval.end_time is None
        assert interval.duration_minutes is None
        assert not interval.is_closed

    def test_shift_time_entry(self):
        interval = IntervalNormalizer.from_shift_time_entry({
            "id": 42,
            "uid": "user-2",
            "actual_clock_in": "2025-01-07T06:00:00",
            "actual_clock_out": "2025-01-07T14:00:00",
            "duration_minutes": "480",
        })

        assert interval.id == "42"
        assert interval.end_time == datetime(2025, 1, 7, 14, 0)
        assert interval.duration_minutes == 480.0

    def test_missing_clock_in_rejected(self):
        with pytest.raises(ValueError, match="clock_in is required"):
            IntervalNormalizer.from_time_entry({"id": "te-3", "uid": "user-1", "clock_in": None})

    def test_shift_time_entry_requires_clock_out(self):
        with pytest.raises(ValueError, match="actual_clock_out is required"):
            IntervalNormalizer.from_shift_time_entry({
                "id": "ste-1",
                "uid": "user-1",
                "actual_clock_in": "2025-01-07T06:00:00",
                "actual_clock_out": "",
            })


class TestOrderingAndFilters:

    def test_sort_returns_new_list(self, make_interval):
        late = make_interval("late", "2025-01-07T08:00", 60)
        early = make_interval("early", "2025-01-06T08:00", 60)
        intervals = [late, early]

        ordered = IntervalNormalizer.sort_intervals(intervals)

        assert [i.id for i in ordered] == ["early", "late"]
        assert intervals == [late, early]

    def test_sort_breaks_ties_by_id(self, make_interval):
        b = make_interval("b", "2025-01-06T08:00", 60)
        a = make_interval("a", "2025-01-06T08:00", 30)

        assert [i.id for i in IntervalNormalizer.sort_intervals([b, a])] == ["a", "b"]
        assert [i.id for i in IntervalNormalizer.partition_by_user([b, a])[0][1]] == ["a", "b"]

    def test_closed_and_with_duration(self, make_interval):
        closed = make_interval("closed", "2025-01-06T08:00", 60)
        still_open = make_interval("open", "2025-01-06T10:00")
        zero = make_interval("zero", "2025-01-06T12:00", 0)

        intervals = [closed, still_open, zero]

        assert [i.id for i in IntervalNormalizer.closed_intervals(intervals)] == ["closed", "zero"]
        assert [i.id for i in IntervalNormalizer.with_duration(intervals)] == ["closed"]

    def test_window_bounds_are_inclusive(self, make_interval):
        intervals = [
            make_interval("before", "2025-01-05T23:59", 60),
            make_interval("at-start", "2025-01-06T00:00", 60),
            make_interval("at-end", "2025-01-12T23:59", 60),
            make_interval("after", "2025-01-13T00:00", 60),
        ]

        selected = IntervalNormalizer.within_window(
            intervals, datetime(2025, 1, 6, 0, 0), datetime(2025, 1, 12, 23, 59)
        )

        assert [i.id for i in selected] == ["at-start", "at-end"]

    def test_partition_by_user(self, make_interval):
        intervals = [
            make_interval("b2", "2025-01-07T08:00", 60, user_id="bob"),
            make_interval("a1", "2025-01-06T08:00", 60, user_id="alice"),
            make_interval("b1", "2025-01-06T08:00", 60, user_id="bob"),
        ]

        groups = IntervalNormalizer.partition_by_user(intervals)

        assert [user for user, _ in groups] == ["alice", "bob"]
        assert [i.id for i in groups[1][1]] == ["b1", "b2"]

    def test_partition_empty(self):
        assert IntervalNormalizer.partition_by_user([]) == []
