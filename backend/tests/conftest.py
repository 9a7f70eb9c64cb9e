import pytest
from datetime import datetime, timedelta

from compliance.rule_sets import DEFAULT_RULE_SETS
from compliance.types import RuleConfig, RuleSet, WorkInterval


@pytest.fixture
def eu_rules() -> RuleConfig:
    """Default EU rule set (11h rest, 8h/10h daily, 48h weekly, 6h/9h breaks)."""
    return DEFAULT_RULE_SETS[RuleSet.EU]


@pytest.fixture
def make_interval():
    """Factory to create WorkInterval objects.

    Leaving minutes out creates an open interval (still clocked in).
    """
    def _make_interval(
        interval_id: str,
        start: str,
        minutes: float = None,
        user_id: str = "user-1",
        duration: float = None,
    ) -> WorkInterval:
        start_time = datetime.fromisoformat(start)
        if minutes is None:
            return WorkInterval(
                id=interval_id,
                user_id=user_id,
                start_time=start_time,
                duration_minutes=duration,
            )
        return WorkInterval(
            id=interval_id,
            user_id=user_id,
            start_time=start_time,
            end_time=start_time + timedelta(minutes=minutes),
            duration_minutes=minutes if duration is None else duration,
        )
    return _make_interval
