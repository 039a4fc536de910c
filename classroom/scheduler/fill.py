from __future__ import annotations

import logging
import math
import warnings
from collections import Counter
from typing import Any, Dict, List, Mapping, Sequence, Set, Union

from ..errors import EmptySubjectsWarning
from ..models.period import FREE_PERIOD, LUNCH_BREAK, TIME_SLOTS, WEEKDAYS, slot_hour
from ..models.rules import Rules
from ..models.subject import Subject
from ..models.timetable import TimetableRow
from .balance import balance_notices

# Hard ceiling on weekly placements per subject when balancing
MAX_FREQUENCY = 3


def frequency_cap(time_slots: Sequence[str], days: Sequence[str], rules: Rules, subject_count: int) -> int:
    # Lunch cells are never assignable, so they don't count towards the share
    assignable = sum(1 for t in time_slots if t != rules.lunch_break) * len(days)
    return min(MAX_FREQUENCY, math.ceil(assignable / subject_count))


def generate_timetable(
    subjects: Sequence[Subject],
    rules: Union[Rules, Mapping[str, Any], None] = None,
    *,
    time_slots: Sequence[str] = TIME_SLOTS,
    days: Sequence[str] = WEEKDAYS,
) -> List[TimetableRow]:
    """Greedily fill a (time slot x weekday) grid from ``subjects``.

    Slots are visited in time order and, within a slot, day by day. Every cell
    gets the least-placed subject still allowed by the rules, ties going to the
    lower semester. Cells with no allowed subject become "Free Period"; the
    lunch slot is "Lunch Break" on every day.

    Returns an empty list (and warns) when ``subjects`` is empty.
    """
    logger = logging.getLogger(__name__)
    if not subjects:
        logger.warning("No subjects provided for timetable generation")
        warnings.warn("No subjects provided for timetable generation", EmptySubjectsWarning, stacklevel=2)
        return []

    rules = Rules.merged(rules)
    frequency: Counter = Counter({s.name: 0 for s in subjects})
    ordered = sorted(subjects, key=lambda s: s.priority)
    used_by_day: Dict[str, Set[str]] = {d: set() for d in days}
    classes_by_day: Counter = Counter()

    def allowed(s: Subject, day: str) -> bool:
        if rules.no_repeat_subject_same_day and s.name in used_by_day[day]:
            return False
        if rules.balance_subjects:
            if frequency[s.name] >= frequency_cap(time_slots, days, rules, len(subjects)):
                return False
        return True

    rows: List[TimetableRow] = []
    for time in time_slots:
        row = TimetableRow(time)
        hour = slot_hour(time)
        is_morning = hour is not None and hour < 12
        for day in days:
            if time == rules.lunch_break:
                row[day] = LUNCH_BREAK
                continue
            if rules.enforce_max_classes_per_day and classes_by_day[day] >= rules.max_classes_per_day:
                row[day] = FREE_PERIOD
                continue

            available = [s for s in ordered if allowed(s, day)]
            if rules.prefer_morning_for_core and is_morning:
                available.sort(key=lambda s: s.priority)
            if not available:
                row[day] = FREE_PERIOD
                continue

            # min() keeps the first of equally placed subjects
            selected = min(available, key=lambda s: frequency[s.name])
            row[day] = selected.name
            frequency[selected.name] += 1
            used_by_day[day].add(selected.name)
            classes_by_day[day] += 1
            logger.debug(f"Place {day} {time} -> {selected.name}")
        rows.append(row)

    balance_notices(rows, subjects, days=days)
    return rows
