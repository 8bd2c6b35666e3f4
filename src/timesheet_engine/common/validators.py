from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if start > end:
        raise ValidationError(f"date range is inverted: {start.isoformat()} > {end.isoformat()}")
    return start, end


def require_positive(value: int, field_name: str) -> int:
    if value is None or int(value) <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return int(value)


def require_hour(value: int, field_name: str) -> int:
    if value is None or not 0 <= int(value) <= 23:
        raise ValidationError(f"{field_name} must be an hour between 0 and 23")
    return int(value)
