import pytest
from dataclasses import fields, replace

from compliance.rule_sets import (
    DEFAULT_RULE_SETS,
    get_default_rules,
    resolve_rule_config,
)
from compliance.types import RuleConfig, RuleSet


class TestDefaultRuleSets:

    def test_eu_and_de_are_distinct_entries(self):
        eu = DEFAULT_RULE_SETS[RuleSet.EU]
        de = DEFAULT_RULE_SETS[RuleSet.DE]

        assert eu.rule_set == RuleSet.EU
        assert de.rule_set == RuleSet.DE
        # Same values today, kept apart for future national deviations
        assert replace(de, rule_set=RuleSet.EU) == eu

    def test_eu_values(self):
        eu = get_default_rules("eu")

        assert eu.daily_rest_period_minutes == 660
        assert eu.weekly_rest_period_minutes == 1440
        assert eu.max_daily_working_time_minutes == 480
        assert eu.max_daily_working_time_with_compensation_minutes == 600
        assert eu.max_weekly_working_time_minutes == 2880
        assert (eu.break_required_after_minutes, eu.break_duration_minutes) == (360, 30)
        assert (eu.break_required_after_minutes_2, eu.break_duration_minutes_2) == (540, 45)

    def test_lookup_is_case_insensitive(self):
        assert get_default_rules("DE").rule_set == RuleSet.DE

    def test_unknown_rule_set(self):
        with pytest.raises(ValueError, match="Invalid rule set"):
            get_default_rules("us")

    def test_to_dict(self):
        data = get_default_rules("de").to_dict()

        assert data["rule_set"] == "de"
        assert data["break_duration_minutes_2"] == 45
        assert set(data) == {f.name for f in fields(RuleConfig)}


class TestResolveRuleConfig:

    def test_without_overrides_returns_defaults(self):
        assert resolve_rule_config("eu") == DEFAULT_RULE_SETS[RuleSet.EU]

    def test_overrides_are_merged(self):
        config = resolve_rule_config("de", {"daily_rest_period_minutes": 600})

        assert config.rule_set == RuleSet.DE
        assert config.daily_rest_period_minutes == 600
        assert config.weekly_rest_period_minutes == 1440

    def test_rule_set_in_overrides_is_ignored(self):
        assert resolve_rule_config("de", {"rule_set": "eu"}).rule_set == RuleSet.DE

    def test_second_break_tier_can_be_disabled(self):
        config = resolve_rule_config("eu", {
            "break_required_after_minutes_2": None,
            "break_duration_minutes_2": None,
        })

        assert config.break_required_after_minutes_2 is None

    @pytest.mark.parametrize("overrides", [
        {"daily_rest_period_minutes": -1},
        {"max_weekly_working_time_minutes": 0},
        {"max_daily_working_time_minutes": 700},
        {"break_required_after_minutes_2": 300},
        {"break_duration_minutes_2": None},
        {"unknown_field": 5},
    ])
    def test_invalid_overrides_rejected(self, overrides):
        with pytest.raises(ValueError):
            resolve_rule_config("eu", overrides)
