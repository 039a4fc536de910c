from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

WARNING_THRESHOLD = 60


@dataclass(frozen=True)
class AttendanceWarning:
    student: str
    percentage: int
    message: str


def attendance_totals(records: Iterable[Mapping[str, Any]]) -> Dict[str, Dict[str, int]]:
    totals: Dict[str, Dict[str, int]] = {}
    for r in records:
        t = totals.setdefault(str(r.get("studentName")), {"present": 0, "total": 0})
        t["total"] += 1
        if r.get("status") == "present":
            t["present"] += 1
    return totals


def analyze_attendance(
    records: Iterable[Mapping[str, Any]], threshold: float = WARNING_THRESHOLD
) -> List[AttendanceWarning]:
    """Warn about every student whose attendance rate is below ``threshold`` percent."""
    warnings: List[AttendanceWarning] = []
    for student, t in attendance_totals(records).items():
        percentage = t["present"] / t["total"] * 100
        if percentage < threshold:
            shown = math.floor(percentage + 0.5)
            warnings.append(
                AttendanceWarning(
                    student=student,
                    percentage=shown,
                    message=f"Warning: {student}'s attendance is {shown}% (below {threshold:g}%)",
                )
            )
    return warnings
