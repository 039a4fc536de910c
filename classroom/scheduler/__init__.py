from .balance import balance_notices, subject_frequency
from .fill import frequency_cap, generate_timetable

__all__ = ["generate_timetable", "frequency_cap", "balance_notices", "subject_frequency"]
