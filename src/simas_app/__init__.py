"""SIMAS: single-user student attendance tracking."""

__version__ = "1.0.0"
