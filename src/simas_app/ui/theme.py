from __future__ import annotations

from simas_app.models import AttendanceStatus

# Core surfaces
VS_BG = "#1E1E1E"
VS_SURFACE = "#252526"
VS_SURFACE_ALT = "#2D2D30"
VS_CARD = "#2F2F33"
VS_SIDEBAR = "#252526"

# Borders and outlines
VS_BORDER = "#3C3C3C"
VS_DIVIDER = "#2F2F2F"

# Accent colors
VS_ACCENT = "#0E639C"
VS_ACCENT_HOVER = "#1177BB"

# Text colors
VS_TEXT = "#F3F3F3"
VS_TEXT_MUTED = "#9DA5B4"

# Feedback colors
VS_SUCCESS = "#6A9955"
VS_WARNING = "#F48771"
VS_DANGER = "#C74E39"
VS_DANGER_HOVER = "#A63D2C"

STATUS_COLORS: dict[AttendanceStatus, str] = {
    AttendanceStatus.PRESENT: "#3C8D40",
    AttendanceStatus.SICK: "#B58B00",
    AttendanceStatus.EXCUSED: "#2F6FB0",
    AttendanceStatus.UNEXCUSED: "#B23A3A",
}

TONE_COLORS = {
    "info": VS_TEXT_MUTED,
    "success": VS_SUCCESS,
    "warning": VS_WARNING,
}
