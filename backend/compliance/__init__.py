"""Working-time compliance rules for recorded work intervals."""

from .types import (
    ComplianceResult,
    RuleConfig,
    RuleSet,
    Violation,
    ViolationDetails,
    ViolationSeverity,
    ViolationType,
    WorkInterval,
)
from .engine import ComplianceEngine
from .checkers import (
    BaseChecker,
    DailyRestChecker,
    ShiftDurationChecker,
    BreakChecker,
    WeeklyRestChecker,
    MaxWeeklyTimeChecker,
)
from .normalizer import IntervalNormalizer
from .rule_sets import (
    DEFAULT_RULE_SETS,
    get_default_rules,
    parse_rule_set,
    resolve_rule_config,
)
from .weeks import WeekBucket, iso_week_key, partition_by_week
from .adjustments import (
    TIME_ACCOUNT_ADJUSTMENT_HOURS,
    adjustment_reason,
    time_account_adjustment,
)

__all__ = [
    "ComplianceResult",
    "RuleConfig",
    "RuleSet",
    "Violation",
    "ViolationDetails",
    "ViolationSeverity",
    "ViolationType",
    "WorkInterval",
    "ComplianceEngine",
    "BaseChecker",
    "DailyRestChecker",
    "ShiftDurationChecker",
    "BreakChecker",
    "WeeklyRestChecker",
    "MaxWeeklyTimeChecker",
    "IntervalNormalizer",
    "DEFAULT_RULE_SETS",
    "get_default_rules",
    "parse_rule_set",
    "resolve_rule_config",
    "WeekBucket",
    "iso_week_key",
    "partition_by_week",
    "TIME_ACCOUNT_ADJUSTMENT_HOURS",
    "time_account_adjustment",
    "adjustment_reason",
]
