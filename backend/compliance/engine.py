"""Compliance evaluation engine that orchestrates all checkers."""

import logging
from typing import Sequence

from .checkers import (
    BaseChecker,
    BreakChecker,
    DailyRestChecker,
    MaxWeeklyTimeChecker,
    ShiftDurationChecker,
    WeeklyRestChecker,
)
from .normalizer import IntervalNormalizer
from .types import ComplianceResult, RuleConfig, Violation, WorkInterval


class ComplianceEngine:
    """
    Main engine for running compliance evaluation.

    Runs every checker against the same intervals and config and
    concatenates the results in a fixed order, so repeated calls with the
    same input return identical lists.
    """

    def __init__(self):
        """Initialize with all checkers, in output order."""
        self.checkers: list[BaseChecker] = [
            DailyRestChecker(),
            ShiftDurationChecker(),
            BreakChecker(),
            WeeklyRestChecker(),
            MaxWeeklyTimeChecker(),
        ]

    def evaluate(self, intervals: Sequence[WorkInterval], config: RuleConfig) -> list[Violation]:
        """
        Run all checks for one user's intervals.

        Args:
            intervals: Work intervals of a single user; not modified
            config: Rule config of the tenant's rule set

        Returns:
            Violations in checker order
        """
        # Stable input order for the per-interval checkers
        ordered = IntervalNormalizer.sort_intervals(intervals)
        violations: list[Violation] = []

        for checker in self.checkers:
            found = checker.check(ordered, config)
            if found:
                logging.debug(f"{type(checker).__name__}: {len(found)} violation(s)")
            violations.extend(found)

        return violations

    def check(self, intervals: Sequence[WorkInterval], config: RuleConfig) -> ComplianceResult:
        """Evaluate and wrap the violations in a ComplianceResult."""
        result = ComplianceResult()
        for violation in self.evaluate(intervals, config):
            result.add_violation(violation)
        return result

    def evaluate_by_user(
        self,
        intervals: Sequence[WorkInterval],
        config: RuleConfig,
    ) -> dict[str, list[Violation]]:
        """
        Evaluate a slice that may hold several users.

        Returns:
            user_id -> violations, users in ascending id order. Users without
            violations are included with an empty list.
        """
        return {
            user_id: self.evaluate(user_intervals, config)
            for user_id, user_intervals in IntervalNormalizer.partition_by_user(intervals)
        }
