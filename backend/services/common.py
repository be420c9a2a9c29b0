"""
common.py — Helpers shared by the services
Server clock and field validation used regardless of transport.
"""

import enum
from datetime import date, datetime, timezone

from errors import ValidationError


def today_utc() -> date:
    """Calendar day of the server's reference clock (UTC)."""
    return datetime.now(timezone.utc).date()


def clean_text(value, field: str, max_length: int, required: bool = False) -> str | None:
    """Trim a text field and enforce its length. Empty optional text becomes None."""
    if value is None:
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field)

    value = value.strip()
    if not value:
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None
    if len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field=field)
    return value


def parse_choice(value, enum_cls: type[enum.Enum], field: str):
    """Coerce a raw value into a member of a closed enum."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {field}, expected one of: {allowed}", field=field) from None


def positive_int(value, field: str, maximum: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field} must be a positive integer", field=field)
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field} must be at most {maximum}", field=field)
    return value
