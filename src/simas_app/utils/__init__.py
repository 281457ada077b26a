from .dates import (
    MONTH_NAMES,
    InvalidDate,
    coerce_date,
    days_in_month,
    format_long_date,
    month_name,
    year_options,
)

__all__ = [
    "MONTH_NAMES",
    "InvalidDate",
    "coerce_date",
    "days_in_month",
    "format_long_date",
    "month_name",
    "year_options",
]
