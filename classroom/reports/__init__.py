from .attendance import AttendanceWarning, analyze_attendance

__all__ = ["AttendanceWarning", "analyze_attendance"]
