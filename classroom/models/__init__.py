# Re-export common types
from .period import FREE_PERIOD, LUNCH_BREAK, TIME_SLOTS, WEEKDAYS
from .rules import Rules
from .subject import Subject
from .timetable import Timetable, TimetableRow, add_class

__all__ = [
    "Subject",
    "Rules",
    "TimetableRow",
    "Timetable",
    "add_class",
    "TIME_SLOTS",
    "WEEKDAYS",
    "LUNCH_BREAK",
    "FREE_PERIOD",
]
