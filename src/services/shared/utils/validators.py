from datetime import date
from decimal import Decimal


def to_decimal(v: object) -> Decimal:
    """Convert any value to Decimal

    Meant to be called from a pydantic ``field_validator(mode="before")``.
    Decimals pass through; everything else goes through ``str``.
    """
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))


def parse_day(value: str | None, field: str) -> date:
    """Parse a YYYY-MM-DD (or full ISO timestamp) query value into a date"""
    if not value:
        raise ValueError(f"{field} is required")
    try:
        return date.fromisoformat(value[:10])
    except ValueError as e:
        raise ValueError(f"Invalid date for {field}: {value}") from e


def parse_positive_int(value: str | None, default: int, field: str) -> int:
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except ValueError as e:
        raise ValueError(f"{field} must be an integer") from e
    if parsed < 1:
        raise ValueError(f"{field} must be at least 1")
    return parsed
