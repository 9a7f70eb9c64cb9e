import pytest
from datetime import date, datetime, timedelta

from compliance.weeks import iso_week_key, partition_by_week


class TestIsoWeekKey:

    def test_year_boundary_days_share_week(self):
        """Tuesday 2024-12-31 and Wednesday 2025-01-01 are both 2025-W01."""
        assert iso_week_key(date(2024, 12, 31)) == "2025-W01"
        assert iso_week_key(date(2025, 1, 1)) == "2025-W01"

    def test_accepts_datetimes(self):
        assert iso_week_key(datetime(2024, 12, 31, 23, 30)) == "2025-W01"

    def test_week_starts_on_monday(self):
        assert iso_week_key(datetime(2025, 1, 5, 23, 59)) == "2025-W01"
        assert iso_week_key(datetime(2025, 1, 6, 0, 0)) == "2025-W02"

    @pytest.mark.parametrize("day,expected", [
        (date(2021, 1, 3), "2020-W53"),
        (date(2026, 12, 31), "2026-W53"),
        (date(2027, 1, 1), "2026-W53"),
        (date(2019, 12, 30), "2020-W01"),
        (date(2023, 1, 1), "2022-W52"),
    ])
    def test_late_december_and_early_january(self, day, expected):
        assert iso_week_key(day) == expected

    def test_matches_isocalendar(self):
        day = date(2019, 1, 1)
        while day < date(2031, 1, 1):
            iso_year, iso_week, _ = day.isocalendar()
            assert iso_week_key(day) == f"{iso_year}-W{iso_week:02d}", day
            day += timedelta(days=1)


class TestPartitionByWeek:

    def test_empty(self):
        assert partition_by_week([]) == []

    def test_contiguous_buckets(self, make_interval):
        intervals = [
            make_interval("a", "2024-12-30T08:00", 60),
            make_interval("b", "2025-01-01T08:00", 60),
            make_interval("c", "2025-01-05T08:00", 60),
            make_interval("d", "2025-01-06T08:00", 60),
            make_interval("e", "2025-01-20T08:00", 60),
        ]

        buckets = partition_by_week(intervals)

        assert [b.key for b in buckets] == ["2025-W01", "2025-W02", "2025-W04"]
        assert [len(b) for b in buckets] == [3, 1, 1]
        assert [i.id for i in buckets[0].slice(intervals)] == ["a", "b", "c"]
        assert (buckets[1].start, buckets[1].stop) == (3, 4)
