from __future__ import annotations

import zipfile
from pathlib import Path

import pytest
from openpyxl import Workbook, load_workbook

from simas_app.models import ReportWindow, SemesterHalf, Student
from simas_app.services import EmptyRosterImportError, RosterImportError, aggregate, format_for_export
from simas_app.services.recap import EXPORT_HEADERS
from simas_app.services.spreadsheet import (
    TEMPLATE_HEADERS,
    TEMPLATE_ROWS,
    TEMPLATE_SHEET_TITLE,
    read_student_file,
    recap_filename,
    write_recap_workbook,
    write_student_template,
)


def _write_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, rows in sheets.items():
        worksheet = workbook.create_sheet(title=title)
        for row in rows:
            worksheet.append(row)
    workbook.save(path)
    return path


def test_read_student_file_reads_every_sheet(tmp_path: Path) -> None:
    path = _write_workbook(
        tmp_path / "students.xlsx",
        {
            "7A": [["NIS", "Name", "Class"], [101, "Ana", "7A"], [102.0, "Budi", "7A"]],
            "7B": [["NIS", "Name", "Class"], ["103", "Citra", "7B"]],
        },
    )

    students = read_student_file(path)

    assert [(s.external_id, s.display_name, s.class_label) for s in students] == [
        ("101", "Ana", "7A"),
        ("102", "Budi", "7A"),
        ("103", "Citra", "7B"),
    ]


def test_read_student_file_accepts_header_aliases_and_skips_blank_rows(tmp_path: Path) -> None:
    path = _write_workbook(
        tmp_path / "students.xlsx",
        {"Sheet": [["No Induk", "Nama Siswa", "Kelas"], ["201", "Dewi", "8A"], [None, "Nameless", "8A"], ["202", None, "8A"]]},
    )

    students = read_student_file(path)

    assert [(s.external_id, s.display_name, s.class_label) for s in students] == [("201", "Dewi", "8A")]


def test_read_student_file_reads_csv(tmp_path: Path) -> None:
    path = tmp_path / "students.csv"
    path.write_text("NIS,Nama,Kelas\n301,Eka,9A\n302,Fajar,\n", encoding="utf-8")

    students = read_student_file(path)

    assert [(s.external_id, s.display_name, s.class_label) for s in students] == [
        ("301", "Eka", "9A"),
        ("302", "Fajar", ""),
    ]


def test_read_student_file_without_usable_rows_raises_empty_error(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "empty.xlsx", {"Sheet": [["Foo", "Bar"], ["1", "2"]]})

    with pytest.raises(EmptyRosterImportError):
        read_student_file(path)


def test_read_student_file_rejects_corrupt_workbook(tmp_path: Path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_text("not a workbook", encoding="utf-8")

    with pytest.raises(RosterImportError) as excinfo:
        read_student_file(path)

    assert not isinstance(excinfo.value, EmptyRosterImportError)


def test_read_student_file_rejects_workbook_with_broken_xml(tmp_path: Path) -> None:
    source = _write_workbook(tmp_path / "source.xlsx", {"Sheet": [["NIS", "Name"], ["1", "A"]]})
    path = tmp_path / "broken.xlsx"
    with zipfile.ZipFile(source) as original, zipfile.ZipFile(path, "w") as damaged:
        for item in original.infolist():
            data = original.read(item.filename)
            if item.filename == "xl/workbook.xml":
                data = b"<workbook><not-closed>"
            damaged.writestr(item, data)

    with pytest.raises(RosterImportError, match="Unable to read file broken.xlsx"):
        read_student_file(path)


def test_read_student_file_rejects_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "students.txt"
    path.write_text("NIS,Name\n1,A\n", encoding="utf-8")

    with pytest.raises(RosterImportError):
        read_student_file(path)


def test_template_round_trips_through_importer(tmp_path: Path) -> None:
    path = write_student_template(tmp_path / "out" / "student_template.xlsx")

    workbook = load_workbook(path)
    worksheet = workbook[TEMPLATE_SHEET_TITLE]
    header = [cell.value for cell in worksheet[1]]
    students = read_student_file(path)

    assert header == list(TEMPLATE_HEADERS)
    assert len(students) == len(TEMPLATE_ROWS)
    assert students[0].external_id == TEMPLATE_ROWS[0][0]


def test_write_recap_workbook_writes_one_sheet_per_class(tmp_path: Path) -> None:
    students = [
        Student(external_id="1", display_name="A", class_label="8B"),
        Student(external_id="2", display_name="B", class_label="7A"),
    ]
    sheets = format_for_export(aggregate(students, [], ReportWindow.for_month(2024, 3)), students)

    path = write_recap_workbook(tmp_path / "recap.xlsx", sheets)
    workbook = load_workbook(path)

    assert workbook.sheetnames == ["Class 7A", "Class 8B"]
    rows = list(workbook["Class 7A"].iter_rows(values_only=True))
    assert rows[0] == EXPORT_HEADERS
    assert rows[1] == (1, "2", "B", "7A", 0, 0, 0, 0, "0.0%")


def test_write_recap_workbook_without_students_writes_header_sheet(tmp_path: Path) -> None:
    path = write_recap_workbook(tmp_path / "recap.xlsx", {})
    workbook = load_workbook(path)

    assert workbook.sheetnames == ["Recap"]
    assert list(workbook["Recap"].iter_rows(values_only=True)) == [EXPORT_HEADERS]


def test_recap_filename_names_window():
    assert recap_filename(ReportWindow.for_month(2024, 3)) == "Attendance_Recap_March_2024.xlsx"
    assert (
        recap_filename(ReportWindow.for_semester(2024, SemesterHalf.SECOND))
        == "Attendance_Recap_Semester_2_2024.xlsx"
    )
