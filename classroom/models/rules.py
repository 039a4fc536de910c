from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Union

logger = logging.getLogger(__name__)

# Rule names as stored by the dashboard front end
CAMEL_CASE_ALIASES: Dict[str, str] = {
    "maxClassesPerDay": "max_classes_per_day",
    "lunchBreak": "lunch_break",
    "noRepeatSubjectSameDay": "no_repeat_subject_same_day",
    "balanceSubjects": "balance_subjects",
    "preferMorningForCore": "prefer_morning_for_core",
    "enforceMaxClassesPerDay": "enforce_max_classes_per_day",
}


@dataclass(frozen=True)
class Rules:
    """Options steering the slot assigner.

    max_classes_per_day: soft cap on subject cells per day. Only applied when
        ``enforce_max_classes_per_day`` is set.
    lunch_break: slot time that becomes "Lunch Break" on every day. Matched
        exactly against the slot string.
    no_repeat_subject_same_day: a subject appears at most once per weekday.
    balance_subjects: cap every subject at min(3, ceil(slot-days / subjects)).
    prefer_morning_for_core: re-rank candidates by priority before noon.
    """

    max_classes_per_day: int = 4
    lunch_break: str | None = "13:00"
    no_repeat_subject_same_day: bool = True
    balance_subjects: bool = True
    prefer_morning_for_core: bool = True
    enforce_max_classes_per_day: bool = False

    @classmethod
    def merged(cls, overrides: Union["Rules", Mapping[str, Any], None] = None) -> "Rules":
        if overrides is None:
            return cls()
        if isinstance(overrides, Rules):
            return overrides
        known = {f.name for f in fields(cls)}
        changes: Dict[str, Any] = {}
        for key, value in overrides.items():
            name = CAMEL_CASE_ALIASES.get(key, key)
            if name not in known:
                logger.info(f"Ignoring unknown timetable rule: {key}")
                continue
            changes[name] = value
        return replace(cls(), **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
