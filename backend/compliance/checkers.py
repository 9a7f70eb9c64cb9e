"""Compliance checkers for working-time regulations.

Each checker is stateless: it reads the intervals and the rule config and
returns a fresh list of violations. None of them mutates its input.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from . import formatting
from .normalizer import IntervalNormalizer
from .types import (
    RuleConfig,
    Violation,
    ViolationDetails,
    ViolationSeverity,
    ViolationType,
    WorkInterval,
)
from .weeks import partition_by_week


def _minutes_between(earlier, later) -> float:
    return (later - earlier).total_seconds() / 60


class BaseChecker(ABC):
    """Base class for compliance checkers."""

    violation_type: ViolationType

    @abstractmethod
    def check(self, intervals: Sequence[WorkInterval], config: RuleConfig) -> list[Violation]:
        """Return the violations found in intervals."""
        pass


class DailyRestChecker(BaseChecker):
    """Validates the minimum rest between consecutive work intervals."""

    violation_type = ViolationType.REST_PERIOD_VIOLATION

    def check(self, intervals: Sequence[WorkInterval], config: RuleConfig) -> list[Violation]:
        violations: list[Violation] = []
        sorted_intervals = IntervalNormalizer.sort_intervals(intervals)

        for i in range(1, len(sorted_intervals)):
            prev_interval = sorted_intervals[i - 1]
            curr_interval = sorted_intervals[i]

            # An open interval has no end to measure rest from
            if prev_interval.end_time is None:
                continue

            rest_minutes = _minutes_between(prev_interval.end_time, curr_interval.start_time)
            if rest_minutes < config.daily_rest_period_minutes:
                violations.append(Violation(
                    violation_type=self.violation_type,
                    severity=ViolationSeverity.ERROR,
                    period_start=prev_interval.end_time,
                    period_end=curr_interval.start_time,
                    details=ViolationDetails(
                        expected=formatting.rest_expected(config.daily_rest_period_minutes),
                        actual=formatting.hours_label(rest_minutes),
                        affected_entries=(prev_interval.id, curr_interval.id),
                    ),
                ))

        return violations


class ShiftDurationChecker(BaseChecker):
    """Validates single-interval duration against the soft and hard daily caps."""

    violation_type = ViolationType.SHIFT_DURATION_VIOLATION

    def check(self, intervals: Sequence[WorkInterval], config: RuleConfig) -> list[Violation]:
        violations: list[Violation] = []

        for interval in intervals:
            if interval.end_time is None or not interval.duration_minutes:
                continue

            duration = interval.duration_minutes
            if duration > config.max_daily_working_time_with_compensation_minutes:
                severity = ViolationSeverity.ERROR
                expected = formatting.max_daily_expected(
                    config.max_daily_working_time_with_compensation_minutes, with_compensation=True
                )
            elif duration > config.max_daily_working_time_minutes:
                severity = ViolationSeverity.WARNING
                expected = formatting.max_daily_expected(
                    config.max_daily_working_time_minutes, with_compensation=False
                )
            else:
                continue

            violations.append(Violation(
                violation_type=self.violation_type,
                severity=severity,
                period_start=interval.start_time,
                period_end=interval.end_time,
                details=ViolationDetails(
                    expected=expected,
                    actual=formatting.hours_label(duration),
                    affected_entries=(interval.id,),
                ),
            ))

        return violations


class BreakChecker(BaseChecker):
    """
    Validates break requirements.

    Breaks are not recorded as intervals, so every interval long enough to
    require a break is reported. Both tiers are evaluated independently.
    """

    violation_type = ViolationType.BREAK_MISSING

    def check(self, intervals: Sequence[WorkInterval], config: RuleConfig) -> list[Violation]:
        violations: list[Violation] = []

        for interval in intervals:
            if interval.end_time is None or not interval.duration_minutes:
                continue

            duration = interval.duration_minutes

            if duration >= config.break_required_after_minutes:
                violations.append(self._violation(
                    interval,
                    ViolationSeverity.WARNING,
                    formatting.break_expected(config.break_duration_minutes),
                    formatting.BREAK_NOT_RECORDED,
                ))

            if config.break_required_after_minutes_2 and duration >= config.break_required_after_minutes_2:
                violations.append(self._violation(
                    interval,
                    ViolationSeverity.ERROR,
                    formatting.break_expected(config.break_duration_minutes_2 or 0),
                    formatting.BREAK_INSUFFICIENT,
                ))

        return violations

    def _violation(
        self,
        interval: WorkInterval,
        severity: ViolationSeverity,
        expected: str,
        actual: str,
    ) -> Violation:
        return Violation(
            violation_type=self.violation_type,
            severity=severity,
            period_start=interval.start_time,
            period_end=interval.end_time,
            details=ViolationDetails(
                expected=expected,
                actual=actual,
                affected_entries=(interval.id,),
            ),
        )


class WeeklyRestChecker(BaseChecker):
    """Validates that each week contains one sufficiently long rest."""

    violation_type = ViolationType.WEEKLY_REST_VIOLATION

    def check(self, intervals: Sequence[WorkInterval], config: RuleConfig) -> list[Violation]:
        violations: list[Violation] = []
        closed = IntervalNormalizer.closed_intervals(IntervalNormalizer.sort_intervals(intervals))

        for bucket in partition_by_week(closed):
            if len(bucket) < 2:
                continue

            week = bucket.slice(closed)
            max_rest = 0.0
            rest_start = None
            rest_end = None

            for i in range(1, len(week)):
                rest_minutes = _minutes_between(week[i - 1].end_time, week[i].start_time)
                if rest_minutes > max_rest:
                    max_rest = rest_minutes
                    rest_start = week[i - 1].end_time
                    rest_end = week[i].start_time

            if max_rest >= config.weekly_rest_period_minutes:
                continue

            # No positive gap at all: report the whole worked span
            if rest_start is None:
                rest_start = week[0].start_time
                rest_end = week[-1].end_time

            violations.append(Violation(
                violation_type=self.violation_type,
                severity=ViolationSeverity.ERROR,
                period_start=rest_start,
                period_end=rest_end,
                details=ViolationDetails(
                    expected=formatting.weekly_rest_expected(config.weekly_rest_period_minutes),
                    actual=formatting.hours_label(max_rest),
                    affected_entries=tuple(i.id for i in week),
                ),
            ))

        return violations


class MaxWeeklyTimeChecker(BaseChecker):
    """Validates the summed working time per ISO week."""

    violation_type = ViolationType.MAX_WORKING_TIME_EXCEEDED

    def check(self, intervals: Sequence[WorkInterval], config: RuleConfig) -> list[Violation]:
        violations: list[Violation] = []
        worked = IntervalNormalizer.with_duration(IntervalNormalizer.sort_intervals(intervals))

        for bucket in partition_by_week(worked):
            week = bucket.slice(worked)
            total_minutes = sum(i.duration_minutes for i in week)

            if total_minutes > config.max_weekly_working_time_minutes:
                violations.append(Violation(
                    violation_type=self.violation_type,
                    severity=ViolationSeverity.ERROR,
                    period_start=week[0].start_time,
                    period_end=week[-1].end_time,
                    details=ViolationDetails(
                        expected=formatting.weekly_max_expected(config.max_weekly_working_time_minutes),
                        actual=formatting.hours_label(total_minutes),
                        affected_entries=tuple(i.id for i in week),
                    ),
                ))

        return violations
