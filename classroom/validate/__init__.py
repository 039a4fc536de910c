from .checks import is_clean, validate_timetable
from .report import format_validation_report, write_validation_report

__all__ = ["validate_timetable", "is_clean", "write_validation_report", "format_validation_report"]
