"""Rendering of thresholds and observed values for violation details.

The strings end up in audit records, so they stay German and stable.
"""

import math


def round_hours(minutes: float) -> float:
    """Minutes as hours rounded half-up to one decimal. Display only."""
    return math.floor(minutes / 60 * 10 + 0.5) / 10


def format_number(value: float) -> str:
    """Render 11.0 as "11" and 10.5 as "10.5"."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


def threshold_hours(minutes: float) -> str:
    return format_number(minutes / 60)


def hours_label(minutes: float) -> str:
    """Observed duration, e.g. "0.1 Stunden"."""
    return f"{format_number(round_hours(minutes))} Stunden"


def rest_expected(minutes: float) -> str:
    return f"{threshold_hours(minutes)} Stunden"


def max_daily_expected(minutes: float, with_compensation: bool) -> str:
    if with_compensation:
        return f"Max. {threshold_hours(minutes)} Stunden"
    return f"Max. {threshold_hours(minutes)} Stunden (ohne Ausgleich)"


def break_expected(break_minutes: float) -> str:
    return f"{format_number(break_minutes)} Minuten Pause erforderlich"


BREAK_NOT_RECORDED = "Keine Pause erfasst"
BREAK_INSUFFICIENT = "Keine ausreichende Pause erfasst"


def weekly_rest_expected(minutes: float) -> str:
    return f"{threshold_hours(minutes)} Stunden wöchentliche Ruhezeit"


def weekly_max_expected(minutes: float) -> str:
    return f"Max. {threshold_hours(minutes)} Stunden pro Woche"
