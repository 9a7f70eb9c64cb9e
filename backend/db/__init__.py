from .database import init_db, close_db
from .models import ComplianceRuleDoc

__all__ = [
    "init_db",
    "close_db",
    "ComplianceRuleDoc",
]
