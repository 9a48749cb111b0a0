from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    return parse_iso_date(value)


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def coerce_date(value: date | str, field_name: str = "date") -> date:
    """Accept a calendar date or its YYYY-MM-DD form; timestamps are rejected."""
    if isinstance(value, datetime):
        raise ValidationError(f"{field_name} must be a calendar date, not a timestamp")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value)
    raise ValidationError(f"{field_name} must be a YYYY-MM-DD string")


def coerce_optional_date(value: Optional[date | str], field_name: str = "date") -> Optional[date]:
    if value is None or value == "":
        return None
    return coerce_date(value, field_name)
