from .attendance import (
    GUEST_PROFILE,
    GUEST_USER_ID,
    STATUS_LABELS,
    AggregateRow,
    AppState,
    AttendanceEvent,
    AttendanceStatus,
    Student,
    UserProfile,
)
from .report_window import ReportWindow, SemesterHalf

__all__ = [
    "AggregateRow",
    "AppState",
    "AttendanceEvent",
    "AttendanceStatus",
    "GUEST_PROFILE",
    "GUEST_USER_ID",
    "ReportWindow",
    "STATUS_LABELS",
    "SemesterHalf",
    "Student",
    "UserProfile",
]
