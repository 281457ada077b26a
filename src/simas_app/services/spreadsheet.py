from __future__ import annotations

import csv
import zipfile
from pathlib import Path
from typing import Any, Iterable, Mapping
from xml.etree.ElementTree import ParseError

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from simas_app.app_logger import get_logger
from simas_app.models import ReportWindow, Student
from simas_app.services.recap import EXPORT_HEADERS, ExportSheet
from simas_app.utils import month_name

logger = get_logger("services.spreadsheet")

TEMPLATE_HEADERS: tuple[str, ...] = ("NIS", "Name", "Class")
TEMPLATE_ROWS: tuple[tuple[str, str, str], ...] = (
    ("12345", "Budi Santoso", "10A"),
    ("12346", "Siti Aminah", "10A"),
    ("12347", "Andi Wijaya", "10B"),
    ("12348", "Rina Putri", "10B"),
)
TEMPLATE_SHEET_TITLE = "Student List"
TEMPLATE_FILENAME = "student_template.xlsx"

COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "external_id": ("nis", "student id", "id", "no induk"),
    "display_name": ("name", "nama", "nama siswa", "student name"),
    "class_label": ("class", "kelas", "class name"),
}

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm", ".csv")


class RosterImportError(RuntimeError):
    """Raised when a roster file cannot be read."""


class EmptyRosterImportError(RosterImportError):
    """Raised when a roster file was read but held no usable rows."""


def _normalise_header(value: Any) -> str:
    return " ".join(str(value or "").strip().lower().split())


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _map_columns(header: Iterable[Any]) -> dict[str, int]:
    positions: dict[str, int] = {}
    normalised = [_normalise_header(cell) for cell in header]
    for key, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in normalised:
                positions[key] = normalised.index(alias)
                break
    return positions


def _students_from_rows(rows: Iterable[Iterable[Any]]) -> list[Student]:
    iterator = iter(rows)
    header = next(iterator, None)
    if header is None:
        return []

    columns = _map_columns(header)
    if "external_id" not in columns or "display_name" not in columns:
        return []

    students: list[Student] = []
    for raw in iterator:
        values = list(raw)

        def pick(key: str) -> str:
            index = columns.get(key)
            if index is None or index >= len(values):
                return ""
            return _cell_text(values[index])

        external_id = pick("external_id")
        display_name = pick("display_name")
        if not external_id or not display_name:
            continue
        students.append(
            Student(external_id=external_id, display_name=display_name, class_label=pick("class_label"))
        )
    return students


def read_student_file(path: Path | str) -> list[Student]:
    """Parse every sheet of a roster workbook (or a CSV file) into students."""

    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise RosterImportError(f"Unable to read file {file_path.name}: unsupported file type.")

    try:
        if suffix == ".csv":
            with file_path.open("r", newline="", encoding="utf-8-sig") as handle:
                students = _students_from_rows(csv.reader(handle))
        else:
            workbook = load_workbook(file_path, read_only=True, data_only=True)
            try:
                students = []
                for worksheet in workbook.worksheets:
                    students.extend(_students_from_rows(worksheet.iter_rows(values_only=True)))
            finally:
                workbook.close()
    except (
        OSError,
        InvalidFileException,
        zipfile.BadZipFile,
        KeyError,
        ParseError,
        ValueError,
    ) as exc:
        logger.warning("Failed to read roster file %s: %s", file_path, exc)
        raise RosterImportError(f"Unable to read file {file_path.name}.") from exc

    if not students:
        raise EmptyRosterImportError(
            "No valid rows found. Make sure the file uses the NIS, Name and Class columns of the template."
        )

    logger.info("Read %d students from %s", len(students), file_path)
    return students


def write_student_template(path: Path | str) -> Path:
    file_path = Path(path)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = TEMPLATE_SHEET_TITLE
    sheet.append(list(TEMPLATE_HEADERS))
    for row in TEMPLATE_ROWS:
        sheet.append(list(row))

    file_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(file_path)
    return file_path


def write_recap_workbook(path: Path | str, sheets: Mapping[str, ExportSheet]) -> Path:
    file_path = Path(path)
    workbook = Workbook()
    default_sheet = workbook.active

    if sheets:
        workbook.remove(default_sheet)
        for export_sheet in sheets.values():
            worksheet = workbook.create_sheet(title=export_sheet.title)
            worksheet.append(list(export_sheet.headers))
            for row in export_sheet.rows:
                worksheet.append(row)
    else:
        # openpyxl refuses to save a workbook without a visible sheet
        default_sheet.title = "Recap"
        default_sheet.append(list(EXPORT_HEADERS))

    file_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(file_path)
    logger.info("Wrote recap workbook %s with %d sheet(s)", file_path, len(sheets))
    return file_path


def recap_filename(window: ReportWindow) -> str:
    if window.is_semester:
        return f"Attendance_Recap_Semester_{int(window.half)}_{window.year}.xlsx"
    return f"Attendance_Recap_{month_name(window.month)}_{window.year}.xlsx"
