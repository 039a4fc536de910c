from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from ..models.period import WEEKDAYS
from ..models.subject import Subject
from ..models.timetable import TimetableRow

# Maximum allowed deviation from the mean placement count
BALANCE_THRESHOLD = 2


def subject_frequency(
    rows: Sequence[TimetableRow], subjects: Sequence[Subject], days: Sequence[str] = WEEKDAYS
) -> Dict[str, int]:
    freq: Dict[str, int] = {s.name: 0 for s in subjects}
    for row in rows:
        for day in days:
            label = row.get(day)
            if label in freq:
                freq[label] += 1
    return freq


def balance_notices(
    rows: Sequence[TimetableRow],
    subjects: Sequence[Subject],
    *,
    days: Sequence[str] = WEEKDAYS,
    threshold: float = BALANCE_THRESHOLD,
    log: bool = True,
) -> List[str]:
    """Flag subjects placed noticeably more or less often than average.

    Advisory only: the grid is never modified.
    """
    logger = logging.getLogger(__name__)
    if not subjects:
        return []
    freq = subject_frequency(rows, subjects, days)
    avg = sum(freq.values()) / len(subjects)
    notices: List[str] = []
    for s in subjects:
        if abs(freq[s.name] - avg) > threshold:
            msg = f"Subject {s.name} needs rebalancing ({freq[s.name]} vs avg {avg:g})"
            if log:
                logger.info(msg)
            notices.append(msg)
    return notices
