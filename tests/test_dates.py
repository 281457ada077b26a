from datetime import date, datetime

import pytest

from simas_app.utils import (
    InvalidDate,
    coerce_date,
    days_in_month,
    format_long_date,
    month_name,
    year_options,
)


@pytest.mark.parametrize(
    "value",
    [
        date(2024, 3, 5),
        datetime(2024, 3, 5, 14, 30),
        "2024-03-05",
        "2024-03-05T08:00:00",
        "05/03/2024",
        "05-03-2024",
        "2024/03/05",
    ],
)
def test_coerce_date_accepts_common_formats(value):
    assert coerce_date(value) == date(2024, 3, 5)


@pytest.mark.parametrize("value", ["", "yesterday", "2024-13-01", None, 20240305])
def test_coerce_date_rejects_garbage(value):
    with pytest.raises(InvalidDate):
        coerce_date(value)


def test_month_helpers():
    assert month_name(3) == "March"
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    with pytest.raises(InvalidDate):
        month_name(0)


def test_format_long_date():
    assert format_long_date(date(2024, 3, 5)) == "Tuesday, 5 March 2024"


def test_year_options_span_current_year():
    assert year_options(today=date(2025, 6, 1)) == [2023, 2024, 2025, 2026, 2027]
    assert year_options(today=date(2025, 6, 1), span=0) == [2025]
