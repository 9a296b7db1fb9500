"""Text ⇄ number conversion for display values, plus relative-age labels.

Display values are text. They are parsed only when an operation needs a
number, and results are rendered back with the shortest text that
round-trips (``8`` rather than ``8.0``).
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

# Plain notation is used between these magnitudes, exponent notation outside.
_PLAIN_MIN = 1e-6
_PLAIN_MAX = 1e21


def parse_value(text: str) -> float:
    """Parse display text into a float.

    Malformed text gives ``nan`` so it propagates through arithmetic
    instead of being rejected.
    """
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


def format_number(value: float) -> str:
    """Render a float the way the display shows it.

    Examples:
        8.0 → '8', 0.1 + 0.2 → '0.30000000000000004', 1e21 → '1e+21',
        1.5e-7 → '1.5e-7', inf → 'Infinity'.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    # repr() is the shortest text that round-trips
    shortest = repr(value)
    if _PLAIN_MIN <= abs(value) < _PLAIN_MAX:
        text = format(Decimal(shortest), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    # Outside the plain range repr() always uses an exponent
    mantissa, _, exponent = shortest.partition("e")
    exp = int(exponent)
    sign = "+" if exp >= 0 else "-"
    return f"{mantissa}e{sign}{abs(exp)}"


def format_age(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """Relative age of a history entry ("Just now", "5 minutes ago", ...)."""
    now = now or datetime.now(timezone.utc)
    minutes = int((now - timestamp).total_seconds() // 60)

    if minutes <= 0:
        return "Just now"
    if minutes == 1:
        return "1 minute ago"
    if minutes < 60:
        return f"{minutes} minutes ago"

    hours = minutes // 60
    if hours == 1:
        return "1 hour ago"
    if hours < 24:
        return f"{hours} hours ago"

    return timestamp.strftime("%Y-%m-%d")
