from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Optional

from simas_app.utils.dates import month_name


class SemesterHalf(IntEnum):
    FIRST = 1
    SECOND = 2

    @property
    def months(self) -> range:
        return range(1, 7) if self is SemesterHalf.FIRST else range(7, 13)

    @property
    def label(self) -> str:
        return "Semester 1 (Jan - Jun)" if self is SemesterHalf.FIRST else "Semester 2 (Jul - Dec)"


@dataclass(slots=True, frozen=True)
class ReportWindow:
    """A calendar month or a six-month half of one year."""

    year: int
    month: Optional[int] = None
    half: Optional[SemesterHalf] = None

    def __post_init__(self) -> None:
        if (self.month is None) == (self.half is None):
            raise ValueError("A report window needs exactly one of month or half.")
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}.")

    @classmethod
    def for_month(cls, year: int, month: int) -> "ReportWindow":
        return cls(year=year, month=month)

    @classmethod
    def for_semester(cls, year: int, half: SemesterHalf | int) -> "ReportWindow":
        return cls(year=year, half=SemesterHalf(half))

    @classmethod
    def containing(cls, day: date, *, semester: bool = False) -> "ReportWindow":
        if semester:
            return cls.for_semester(day.year, SemesterHalf.FIRST if day.month <= 6 else SemesterHalf.SECOND)
        return cls.for_month(day.year, day.month)

    @property
    def is_semester(self) -> bool:
        return self.half is not None

    def contains(self, day: date) -> bool:
        if day.year != self.year:
            return False
        if self.month is not None:
            return day.month == self.month
        return day.month in self.half.months

    def label(self) -> str:
        if self.month is not None:
            return f"{month_name(self.month)} {self.year}"
        return f"Semester {int(self.half)} {self.year}"
