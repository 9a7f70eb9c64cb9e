from datetime import datetime
from typing import Any

from pydantic import BaseModel

from compliance.types import WorkInterval
from utils import as_utc


class WorkIntervalSchema(BaseModel):
    id: str
    user_id: str
    start_time: datetime
    end_time: datetime | None = None  # None while still clocked in
    duration_minutes: float | None = None

    def to_interval(self) -> WorkInterval:
        return WorkInterval(
            id=self.id,
            user_id=self.user_id,
            start_time=as_utc(self.start_time),
            end_time=as_utc(self.end_time) if self.end_time else None,
            duration_minutes=self.duration_minutes,
        )


class CheckComplianceRequest(BaseModel):
    start_date: datetime
    end_date: datetime
    user_id: str | None = None
    intervals: list[WorkIntervalSchema] = []
    # Raw records as stored by time tracking and the shift pool
    time_entries: list[dict[str, Any]] = []
    shift_time_entries: list[dict[str, Any]] = []


class UpdateRuleSetRequest(BaseModel):
    rule_set: str
    config: dict[str, Any] = {}  # Partial overrides of the rule set defaults
    updated_by: str | None = None


class ComplianceRuleResponse(BaseModel):
    tenant_id: str
    rule_set: str
    config: dict[str, Any]  # Effective config
    overrides: dict[str, Any] = {}
    updated_at: str | None = None
    updated_by: str | None = None


class ViolationDetailsSchema(BaseModel):
    expected: str
    actual: str
    affected_entries: list[str]


class ComplianceViolationSchema(BaseModel):
    """Violation detected for one user. Not persisted by this service."""
    user_id: str
    rule_set: str
    violation_type: str  # "REST_PERIOD_VIOLATION", "BREAK_MISSING", etc.
    severity: str  # "error", "warning"
    period_start: str
    period_end: str
    details: ViolationDetailsSchema
    time_account_adjustment_hours: float = 0.0
    time_account_adjustment_reason: str = ""


class ComplianceSummary(BaseModel):
    total_violations: int
    error_count: int
    warning_count: int
    counts_by_type: dict[str, int]
    is_compliant: bool


class ComplianceCheckResponse(BaseModel):
    rule_set: str
    checked_users: list[str]
    violations: list[ComplianceViolationSchema]
    summary: ComplianceSummary
