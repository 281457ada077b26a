from datetime import date

from simas_app.models import AttendanceEvent, AttendanceStatus, ReportWindow, SemesterHalf, Student
from simas_app.services import aggregate, format_for_export, record_status
from simas_app.services.recap import EXPORT_HEADERS, SHEET_NAME_LIMIT, format_percentage, sheet_name_for


def _event(student, day, status):
    return AttendanceEvent(student_id=student.id, date=day, status=status)


def test_aggregate_counts_each_status_inside_month():
    ana = Student(external_id="101", display_name="Ana", class_label="7A")
    events = [
        _event(ana, date(2024, 3, 1), AttendanceStatus.PRESENT),
        _event(ana, date(2024, 3, 2), AttendanceStatus.PRESENT),
        _event(ana, date(2024, 3, 3), AttendanceStatus.SICK),
        _event(ana, date(2024, 3, 4), AttendanceStatus.UNEXCUSED),
        _event(ana, date(2024, 4, 1), AttendanceStatus.EXCUSED),
    ]

    (row,) = aggregate([ana], events, ReportWindow.for_month(2024, 3))

    assert (row.present, row.sick, row.excused, row.unexcused) == (2, 1, 0, 1)
    assert row.total == 4
    assert row.percentage == 50.0


def test_aggregate_gives_zero_row_for_student_without_events():
    ana = Student(external_id="101", display_name="Ana", class_label="7A")

    (row,) = aggregate([ana], [], ReportWindow.for_month(2024, 3))

    assert row.student_id == ana.id
    assert row.total == 0
    assert row.percentage == 0.0
    assert format_percentage(row) == "0.0%"


def test_aggregate_keeps_roster_order_and_filters_class():
    ana = Student(external_id="101", display_name="Ana", class_label="7B")
    budi = Student(external_id="102", display_name="Budi", class_label="7A")
    citra = Student(external_id="103", display_name="Citra", class_label="7B")

    rows = aggregate([ana, budi, citra], [], ReportWindow.for_month(2024, 3))
    filtered = aggregate([ana, budi, citra], [], ReportWindow.for_month(2024, 3), class_filter="7B")

    assert [row.student_id for row in rows] == [ana.id, budi.id, citra.id]
    assert [row.student_id for row in filtered] == [ana.id, citra.id]


def test_aggregate_ignores_unknown_students_and_statuses():
    ana = Student(external_id="101", display_name="Ana")
    events = [
        _event(ana, date(2024, 3, 1), "Late"),
        AttendanceEvent(student_id="ghost", date=date(2024, 3, 1), status=AttendanceStatus.PRESENT),
    ]

    rows = aggregate([ana], events, ReportWindow.for_month(2024, 3))

    assert len(rows) == 1
    assert rows[0].total == 0


def test_semester_window_boundaries():
    ana = Student(external_id="101", display_name="Ana")
    events = [
        _event(ana, date(2024, 1, 1), AttendanceStatus.PRESENT),
        _event(ana, date(2024, 6, 30), AttendanceStatus.PRESENT),
        _event(ana, date(2024, 7, 1), AttendanceStatus.SICK),
        _event(ana, date(2023, 3, 1), AttendanceStatus.SICK),
    ]

    (first,) = aggregate([ana], events, ReportWindow.for_semester(2024, SemesterHalf.FIRST))
    (second,) = aggregate([ana], events, ReportWindow.for_semester(2024, SemesterHalf.SECOND))

    assert (first.present, first.sick) == (2, 0)
    assert (second.present, second.sick) == (0, 1)


def test_recorded_month_produces_expected_export_row():
    ana = Student(external_id="101", display_name="Ana", class_label="7A")
    events = []
    for day in (1, 2, 3):
        events = record_status(events, ana.id, date(2024, 3, day), AttendanceStatus.PRESENT)
    events = record_status(events, ana.id, date(2024, 3, 4), AttendanceStatus.SICK)
    events = record_status(events, ana.id, date(2024, 3, 4), AttendanceStatus.UNEXCUSED)

    rows = aggregate([ana], events, ReportWindow.for_month(2024, 3))
    sheets = format_for_export(rows, [ana])

    assert list(sheets) == ["7A"]
    assert sheets["7A"].title == "Class 7A"
    assert sheets["7A"].headers == EXPORT_HEADERS
    assert sheets["7A"].rows == [[1, "101", "Ana", "7A", 3, 0, 0, 1, "75.0%"]]


def test_format_for_export_partitions_by_class():
    students = [
        Student(external_id="1", display_name="A", class_label="8B"),
        Student(external_id="2", display_name="B", class_label="7A"),
        Student(external_id="3", display_name="C", class_label="8B"),
    ]
    rows = aggregate(students, [], ReportWindow.for_month(2024, 3))

    sheets = format_for_export(rows, students)

    assert list(sheets) == ["7A", "8B"]
    assert [row[0] for row in sheets["8B"].rows] == [1, 2]
    assert [row[2] for row in sheets["8B"].rows] == ["A", "C"]
    assert sum(len(sheet.rows) for sheet in sheets.values()) == len(rows)


def test_format_for_export_drops_rows_for_removed_students():
    ana = Student(external_id="1", display_name="Ana", class_label="7A")
    rows = aggregate([ana], [], ReportWindow.for_month(2024, 3))

    assert format_for_export(rows, []) == {}


def test_percentage_rounds_to_one_decimal():
    ana = Student(external_id="1", display_name="Ana")
    events = [
        _event(ana, date(2024, 3, 1), AttendanceStatus.PRESENT),
        _event(ana, date(2024, 3, 2), AttendanceStatus.PRESENT),
        _event(ana, date(2024, 3, 3), AttendanceStatus.EXCUSED),
    ]

    (row,) = aggregate([ana], events, ReportWindow.for_month(2024, 3))

    assert format_percentage(row) == "66.7%"


def test_sheet_name_is_sanitised_truncated_and_unique():
    long_label = "X" * 40

    assert sheet_name_for("7/A") == "Class 7_A"
    assert len(sheet_name_for(long_label)) == SHEET_NAME_LIMIT
    assert sheet_name_for("7A", taken=["Class 7A"]) == "Class 7A (2)"
    assert sheet_name_for("") == "Class"


def test_truncated_sheet_names_do_not_collide():
    students = [
        Student(external_id="1", display_name="A", class_label="Y" * 40 + "1"),
        Student(external_id="2", display_name="B", class_label="Y" * 40 + "2"),
    ]
    rows = aggregate(students, [], ReportWindow.for_month(2024, 3))

    titles = [sheet.title for sheet in format_for_export(rows, students).values()]

    assert len(set(titles)) == 2
    assert all(len(title) <= SHEET_NAME_LIMIT for title in titles)


def test_march_scenario_for_two_students():
    first = Student(external_id="001", display_name="Ana", class_label="10A")
    second = Student(external_id="002", display_name="Budi", class_label="10A")
    events = [
        _event(first, date(2024, 3, 1), AttendanceStatus.PRESENT),
        _event(first, date(2024, 3, 2), AttendanceStatus.SICK),
        _event(second, date(2024, 3, 1), AttendanceStatus.PRESENT),
    ]

    rows = aggregate([first, second], events, ReportWindow.for_month(2024, 3))

    assert [(r.present, r.sick, r.total, r.percentage) for r in rows] == [(1, 1, 2, 50.0), (1, 0, 1, 100.0)]
