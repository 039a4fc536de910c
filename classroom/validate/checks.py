from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, List, Sequence

from ..models.period import FREE_PERIOD, LUNCH_BREAK, WEEKDAYS
from ..models.rules import Rules
from ..models.subject import Subject
from ..models.timetable import Timetable, TimetableRow
from ..scheduler.fill import frequency_cap


def validate_timetable(
    rows: Sequence[TimetableRow],
    subjects: Sequence[Subject],
    rules: Rules,
    days: Sequence[str] = WEEKDAYS,
) -> Dict[str, object]:
    tt = Timetable(list(rows), tuple(days))
    report: Dict[str, object] = {}
    report["row_count"] = len(tt.rows)
    names = {s.name for s in subjects}

    # Lunch row must be "Lunch Break" for every day
    lunch_violations: List[str] = []
    lunch = tt.row_for(rules.lunch_break) if rules.lunch_break else None
    if lunch is not None:
        lunch_violations = [f"{d} {lunch.time}" for d in tt.days if lunch.get(d) != LUNCH_BREAK]
    report["lunch_violations"] = lunch_violations

    # Every cell is a known subject, lunch or free
    unknown: List[str] = []
    missing: List[str] = []
    for time, day, label in tt.cells():
        if label is None:
            missing.append(f"{day} {time}")
        elif label not in names and label not in {LUNCH_BREAK, FREE_PERIOD}:
            unknown.append(f"{day} {time}: {label}")
    report["missing_cells"] = missing
    report["unknown_labels"] = unknown

    # Anti-repeat per day
    repeat_in_day: Dict[str, List[str]] = defaultdict(list)
    if rules.no_repeat_subject_same_day:
        for d in tt.days:
            placed = Counter(label for label in tt.subjects_on(d) if label in names)
            for subj, c in placed.items():
                if c > 1:
                    repeat_in_day[d].append(subj)
    report["repeat_in_day"] = dict(repeat_in_day)

    counts = tt.counts()
    report["subject_counts"] = {s.name: counts.get(s.name, 0) for s in subjects}
    report["free_periods"] = counts.get(FREE_PERIOD, 0)

    over_cap: Dict[str, int] = {}
    if rules.balance_subjects and subjects:
        cap = frequency_cap([r.time for r in tt.rows], tt.days, rules, len(subjects))
        report["frequency_cap"] = cap
        over_cap = {s: c for s, c in counts.items() if s in names and c > cap}
    report["over_cap"] = over_cap
    return report


def is_clean(report: Dict[str, object]) -> bool:
    return not any(
        report.get(k) for k in ("lunch_violations", "missing_cells", "unknown_labels", "repeat_in_day", "over_cap")
    )
