from datetime import date

import pytest

from simas_app.models import ReportWindow, SemesterHalf


def test_month_window_contains_only_that_month():
    window = ReportWindow.for_month(2024, 2)

    assert window.contains(date(2024, 2, 29))
    assert not window.contains(date(2024, 3, 1))
    assert not window.contains(date(2023, 2, 1))
    assert window.label() == "February 2024"


def test_semester_halves_split_year_at_july():
    first = ReportWindow.for_semester(2024, 1)
    second = ReportWindow.for_semester(2024, SemesterHalf.SECOND)

    assert first.contains(date(2024, 6, 30))
    assert not first.contains(date(2024, 7, 1))
    assert second.contains(date(2024, 7, 1))
    assert second.contains(date(2024, 12, 31))
    assert second.label() == "Semester 2 2024"
    assert second.is_semester


def test_containing_picks_window_for_day():
    assert ReportWindow.containing(date(2024, 8, 17)) == ReportWindow.for_month(2024, 8)
    assert ReportWindow.containing(date(2024, 8, 17), semester=True) == ReportWindow.for_semester(2024, 2)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"year": 2024},
        {"year": 2024, "month": 3, "half": SemesterHalf.FIRST},
        {"year": 2024, "month": 13},
    ],
)
def test_invalid_windows_are_rejected(kwargs):
    with pytest.raises(ValueError):
        ReportWindow(**kwargs)
