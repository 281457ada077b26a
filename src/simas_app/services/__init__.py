from .attendance_log import InvalidStatusError, record_status
from .attendance_service import AttendanceService, ImportResult, NoActiveProfileError, UnknownStudentError
from .identity import IdentityService, InvalidProfileError
from .recap import ExportSheet, aggregate, format_for_export
from .roster import merge_imported_students
from .spreadsheet import EmptyRosterImportError, RosterImportError

__all__ = [
	"AttendanceService",
	"EmptyRosterImportError",
	"ExportSheet",
	"IdentityService",
	"ImportResult",
	"InvalidProfileError",
	"InvalidStatusError",
	"NoActiveProfileError",
	"RosterImportError",
	"UnknownStudentError",
	"aggregate",
	"format_for_export",
	"merge_imported_students",
	"record_status",
]
