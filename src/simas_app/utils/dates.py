from __future__ import annotations

import calendar
from datetime import date, datetime

MONTH_NAMES: tuple[str, ...] = tuple(calendar.month_name[index] for index in range(1, 13))


class InvalidDate(ValueError):
    pass


def coerce_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        candidate = value.strip()
        try:
            return date.fromisoformat(candidate[:10])
        except ValueError:
            for fmt in ("%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d"):
                try:
                    return datetime.strptime(candidate, fmt).date()
                except ValueError:
                    continue

    raise InvalidDate(f"Unsupported date value: {value!r}")


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise InvalidDate(f"Month must be between 1 and 12, got {month}.")
    return MONTH_NAMES[month - 1]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def format_long_date(value: date | str) -> str:
    day = coerce_date(value)
    return f"{calendar.day_name[day.weekday()]}, {day.day} {month_name(day.month)} {day.year}"


def year_options(*, today: date | None = None, span: int = 2) -> list[int]:
    """Years offered in pickers: ``span`` either side of the current year."""
    reference = today or date.today()
    return list(range(reference.year - span, reference.year + span + 1))
