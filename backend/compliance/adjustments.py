"""Time-account adjustments booked for detected violations."""

from .types import Violation, ViolationType


# Hours deducted from the user's time account per violation
TIME_ACCOUNT_ADJUSTMENT_HOURS: dict[ViolationType, float] = {
    ViolationType.REST_PERIOD_VIOLATION: -0.5,
    ViolationType.SHIFT_DURATION_VIOLATION: -1.0,
    ViolationType.BREAK_MISSING: -0.25,
    ViolationType.WEEKLY_REST_VIOLATION: -1.0,
    ViolationType.MAX_WORKING_TIME_EXCEEDED: -2.0,
}


def time_account_adjustment(violation: Violation) -> float:
    return TIME_ACCOUNT_ADJUSTMENT_HOURS.get(violation.violation_type, 0.0)


def adjustment_reason(violation: Violation) -> str:
    return f"Compliance-Verstoß: {violation.violation_type.value}"
