from datetime import datetime
from typing import Optional
from beanie import Document, Indexed
from pydantic import Field

from utils import utc_now


class ComplianceRuleDoc(Document):
    """
    Rule set selection of a tenant.

    Only the overrides are stored; the effective config is the rule set's
    defaults merged with them, see compliance.rule_sets.resolve_rule_config.
    """
    tenant_id: Indexed(str, unique=True)
    rule_set: str = "eu"  # "eu", "de"
    config: dict = {}  # Partial overrides of the rule set defaults
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    updated_by: Optional[str] = None  # "system" for auto-created defaults

    class Settings:
        name = "compliance_rules"
