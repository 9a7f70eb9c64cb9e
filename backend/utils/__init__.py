from .time import utc_now, as_utc
from .log import setup_logging

__all__ = ["utc_now", "as_utc", "setup_logging"]
