# app/core/parsing.py
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

from app.core.errors import ValidationError


def parse_id(value: Optional[Union[str, int]], field: str, required: bool = True) -> Optional[int]:
    """Validate an id taken from a query string or path before it reaches a filter."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required")
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    else:
        text = str(value).strip()
        if not text.isdigit():
            raise ValidationError(f"Invalid {field}: {value}")
        parsed = int(text)
    if parsed <= 0:
        raise ValidationError(f"Invalid {field}: {value}")
    return parsed


def to_day(value: Union[str, date, datetime]) -> date:
    """Truncate a date, datetime or ISO-8601 string to its calendar day.

    Accepts ``YYYY-MM-DD`` as well as full timestamps such as
    ``2024-02-01T10:30:00Z``; the time part is dropped.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        raise ValueError("empty date")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        # Only a date followed by a time part may be cut down to its first 10 chars
        if len(text) > 10 and text[10] not in ("T", " "):
            raise
        return date.fromisoformat(text[:10])


def parse_day(value: Optional[str], field: str, required: bool = True) -> Optional[date]:
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required")
        return None
    try:
        return to_day(value)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value}")


def day_range(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
