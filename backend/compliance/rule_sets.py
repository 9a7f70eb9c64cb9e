"""Default jurisdiction rule sets and validation of tenant overrides."""

import logging
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .types import RuleConfig, RuleSet


# EU working time directive values. DE currently mirrors EU but is kept as
# its own entry so national deviations can be configured independently.
DEFAULT_RULE_SETS: dict[RuleSet, RuleConfig] = {
    RuleSet.EU: RuleConfig(
        rule_set=RuleSet.EU,
        daily_rest_period_minutes=11 * 60,
        weekly_rest_period_minutes=24 * 60,
        max_daily_working_time_minutes=8 * 60,
        max_daily_working_time_with_compensation_minutes=10 * 60,
        max_weekly_working_time_minutes=48 * 60,
        break_required_after_minutes=6 * 60,
        break_duration_minutes=30,
        break_required_after_minutes_2=9 * 60,
        break_duration_minutes_2=45,
    ),
    RuleSet.DE: RuleConfig(
        rule_set=RuleSet.DE,
        daily_rest_period_minutes=11 * 60,
        weekly_rest_period_minutes=24 * 60,
        max_daily_working_time_minutes=8 * 60,
        max_daily_working_time_with_compensation_minutes=10 * 60,
        max_weekly_working_time_minutes=48 * 60,
        break_required_after_minutes=6 * 60,
        break_duration_minutes=30,
        break_required_after_minutes_2=9 * 60,
        break_duration_minutes_2=45,
    ),
}


class RuleConfigModel(BaseModel):
    """Validated shape of a rule config as stored or submitted."""
    rule_set: RuleSet
    daily_rest_period_minutes: int = Field(gt=0)
    weekly_rest_period_minutes: int = Field(gt=0)
    max_daily_working_time_minutes: int = Field(gt=0)
    max_daily_working_time_with_compensation_minutes: int = Field(gt=0)
    max_weekly_working_time_minutes: int = Field(gt=0)
    break_required_after_minutes: int = Field(gt=0)
    break_duration_minutes: int = Field(gt=0)
    break_required_after_minutes_2: Optional[int] = Field(default=None, gt=0)
    break_duration_minutes_2: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_tiers(self) -> "RuleConfigModel":
        if self.max_daily_working_time_minutes > self.max_daily_working_time_with_compensation_minutes:
            raise ValueError(
                "max_daily_working_time_minutes must not exceed "
                "max_daily_working_time_with_compensation_minutes"
            )
        if (self.break_required_after_minutes_2 is None) != (self.break_duration_minutes_2 is None):
            raise ValueError(
                "break_required_after_minutes_2 and break_duration_minutes_2 must be set together"
            )
        if (
            self.break_required_after_minutes_2 is not None
            and self.break_required_after_minutes_2 <= self.break_required_after_minutes
        ):
            raise ValueError(
                "break_required_after_minutes_2 must be greater than break_required_after_minutes"
            )
        return self

    def to_rule_config(self) -> RuleConfig:
        return RuleConfig(**self.model_dump())


def parse_rule_set(rule_set: str) -> RuleSet:
    """Resolve a rule set identifier such as "eu" or "DE"."""
    try:
        return RuleSet(str(rule_set).lower())
    except ValueError:
        valid = ", ".join(r.value for r in RuleSet)
        raise ValueError(f"Invalid rule set: {rule_set} (expected one of: {valid})")


def get_default_rules(rule_set: str) -> RuleConfig:
    """Return the default config for a rule set."""
    return DEFAULT_RULE_SETS[parse_rule_set(rule_set)]


def resolve_rule_config(rule_set: str, overrides: Optional[dict] = None) -> RuleConfig:
    """
    Merge tenant overrides onto the defaults of a rule set and validate.

    Args:
        rule_set: Rule set identifier ("eu", "de")
        overrides: Partial config values; unknown keys are rejected

    Returns:
        RuleConfig ready for evaluation

    Raises:
        ValueError: unknown rule set or invalid thresholds
    """
    base = get_default_rules(rule_set)
    overrides = dict(overrides or {})
    overrides.pop("rule_set", None)

    unknown = set(overrides) - set(RuleConfigModel.model_fields)
    if unknown:
        raise ValueError(f"Unknown rule config fields: {', '.join(sorted(unknown))}")

    merged = {**base.to_dict(), **overrides, "rule_set": base.rule_set}
    config = RuleConfigModel(**merged).to_rule_config()
    if overrides:
        logging.debug(f"Resolved {base.rule_set.value} rules with overrides: {sorted(overrides)}")
    return config
