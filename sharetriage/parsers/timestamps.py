# sharetriage/parsers/timestamps.py
# Tolerant timestamp parsing shared by both input parsers.

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Optional

# .NET serializers emit up to 7 fractional digits and trim trailing zeros;
# fromisoformat before 3.11 wants exactly 3 or 6.
_FRACTION_RE = re.compile(r"\.(\d+)")


def _six_digit_fraction(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Best-effort conversion to an aware UTC-normalizable datetime.

    Accepts datetime objects and ISO-8601-like strings such as
    "2024-03-01 10:22:33Z" or "2024-03-01T10:22:33.1234567+01:00".
    Returns None for anything that does not parse. Naive values are
    taken to be UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in "zZ":
            text = text[:-1] + "+00:00"
        text = _FRACTION_RE.sub(_six_digit_fraction, text)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> str:
    """Render as "YYYY-MM-DD HH:MM:SSZ" in UTC, or "" when absent."""
    if value is None:
        return ""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")
