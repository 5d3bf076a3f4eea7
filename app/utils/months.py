"""
Month (MM-YYYY) parsing utilities
"""
import re
from datetime import date

MONTH_FORMAT = "MM-YYYY"

_MONTH_RE = re.compile(r"^(\d{2})-(\d{4})$")


def parse_month(value: str) -> date:
    """
    Разобрать строку MM-YYYY в date (первое число месяца)

    Args:
        value: Строка вида "07-2025"

    Returns:
        date(2025, 7, 1)

    Raises:
        ValueError: если формат не MM-YYYY или месяц вне 01..12

    Example:
        >>> parse_month("01-2024")
        datetime.date(2024, 1, 1)
    """
    match = _MONTH_RE.match(value.strip())
    if not match:
        raise ValueError(f"invalid month {value!r}, expected {MONTH_FORMAT}")

    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise ValueError(f"invalid month {value!r}, expected {MONTH_FORMAT}")

    return date(year, month, 1)


def parse_optional_month(value: str | None) -> date | None:
    """None and empty string both mean "not set" """
    if value is None or not value.strip():
        return None
    return parse_month(value)


def format_month(value: date | None) -> str | None:
    """
    date -> "MM-YYYY"

    Example:
        >>> format_month(date(2024, 3, 1))
        "03-2024"
    """
    if value is None:
        return None
    return f"{value.month:02d}-{value.year:04d}"
