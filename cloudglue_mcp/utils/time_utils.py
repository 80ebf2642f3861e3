import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from ..exceptions import ValidationException


def format_time(seconds: Union[int, float]) -> str:
    """Format a position in seconds as ``MM:SS``, or ``HH:MM:SS`` past the first hour.

    Fractions are truncated, never rounded.
    """
    total = int(math.floor(seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def parse_day(value: str, field_name: str = "date") -> date:
    """Parse a ``YYYY-MM-DD`` filter value."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationException(
            f"Invalid {field_name} '{value}'. Expected format: YYYY-MM-DD (e.g., '2024-01-15')",
            error_code="INVALID_DATE",
        )


def start_of_day_utc(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day_utc(day: date) -> datetime:
    """Last millisecond of ``day`` in UTC (``23:59:59.999``)."""
    return start_of_day_utc(day) + timedelta(days=1) - timedelta(milliseconds=1)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the API into an aware UTC datetime.

    Epoch numbers are accepted too. Returns None for missing or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        # Millisecond epochs are what JavaScript clients emit.
        seconds = value / 1000 if value > 1e11 else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
