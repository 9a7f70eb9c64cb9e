"""Type definitions for the compliance module."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Optional


class ViolationType(str, Enum):
    """Types of compliance violations."""
    REST_PERIOD_VIOLATION = "REST_PERIOD_VIOLATION"
    SHIFT_DURATION_VIOLATION = "SHIFT_DURATION_VIOLATION"
    BREAK_MISSING = "BREAK_MISSING"
    WEEKLY_REST_VIOLATION = "WEEKLY_REST_VIOLATION"
    MAX_WORKING_TIME_EXCEEDED = "MAX_WORKING_TIME_EXCEEDED"


class ViolationSeverity(str, Enum):
    """Severity levels for violations."""
    WARNING = "warning"  # Soft limit, informational
    ERROR = "error"  # Regulatory breach


class RuleSet(str, Enum):
    """Named jurisdiction rule sets."""
    EU = "eu"
    DE = "de"


@dataclass(frozen=True)
class RuleConfig:
    """Rule parameters for a jurisdiction. All values are minutes."""
    rule_set: RuleSet = RuleSet.EU

    daily_rest_period_minutes: int = 11 * 60
    weekly_rest_period_minutes: int = 24 * 60

    # Daily caps: exceeding the first warns, exceeding the second is an error
    max_daily_working_time_minutes: int = 8 * 60
    max_daily_working_time_with_compensation_minutes: int = 10 * 60

    max_weekly_working_time_minutes: int = 48 * 60

    # Break tiers
    break_required_after_minutes: int = 6 * 60
    break_duration_minutes: int = 30
    break_required_after_minutes_2: Optional[int] = 9 * 60
    break_duration_minutes_2: Optional[int] = 45

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["rule_set"] = self.rule_set.value
        return data


@dataclass(frozen=True)
class WorkInterval:
    """A recorded work interval for one user."""
    id: str
    user_id: str
    start_time: datetime
    end_time: Optional[datetime] = None  # None while still clocked in
    duration_minutes: Optional[float] = None  # Taken as recorded

    @property
    def is_closed(self) -> bool:
        return self.end_time is not None


@dataclass(frozen=True)
class ViolationDetails:
    """Human readable evidence for a violation."""
    expected: str
    actual: str
    affected_entries: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "expected": self.expected,
            "actual": self.actual,
            "affected_entries": list(self.affected_entries),
        }


@dataclass(frozen=True)
class Violation:
    """A single compliance violation, tagged by violation_type."""
    violation_type: ViolationType
    severity: ViolationSeverity
    period_start: datetime
    period_end: datetime
    details: ViolationDetails

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "violation_type": self.violation_type.value,
            "severity": self.severity.value,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "details": self.details.to_dict(),
        }


@dataclass
class ComplianceResult:
    """Result of compliance evaluation."""
    violations: list[Violation] = field(default_factory=list)
    is_compliant: bool = True

    def add_violation(self, violation: Violation):
        """Add a violation to the result."""
        self.violations.append(violation)
        if violation.severity == ViolationSeverity.ERROR:
            self.is_compliant = False

    @property
    def error_count(self) -> int:
        """Count of error-level violations."""
        return sum(1 for v in self.violations if v.severity == ViolationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        """Count of warning-level violations."""
        return sum(1 for v in self.violations if v.severity == ViolationSeverity.WARNING)

    @property
    def counts_by_type(self) -> dict[str, int]:
        """Violation counts keyed by type, every type present."""
        counts = {t.value: 0 for t in ViolationType}
        for v in self.violations:
            counts[v.violation_type.value] += 1
        return counts

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "violations": [v.to_dict() for v in self.violations],
            "is_compliant": self.is_compliant,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "counts_by_type": self.counts_by_type,
        }
