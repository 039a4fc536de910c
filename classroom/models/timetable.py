from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from ..errors import TimetableEditError
from .period import FREE, WEEKDAYS, clock_key


@dataclass
class TimetableRow:
    time: str
    cells: Dict[str, str] = field(default_factory=dict)

    def __getitem__(self, day: str) -> str:
        return self.cells[day]

    def __setitem__(self, day: str, label: str) -> None:
        self.cells[day] = label

    def get(self, day: str, default: str | None = None) -> str | None:
        return self.cells.get(day, default)

    def to_record(self) -> Dict[str, str]:
        return {"time": self.time, **self.cells}

    @classmethod
    def from_record(cls, record: Mapping[str, Any], days: Sequence[str] = WEEKDAYS) -> "TimetableRow":
        return cls(str(record["time"]), {d: str(record.get(d, FREE)) for d in days})


@dataclass
class Timetable:
    rows: List[TimetableRow] = field(default_factory=list)
    days: Tuple[str, ...] = WEEKDAYS

    def row_for(self, time: str) -> TimetableRow | None:
        for r in self.rows:
            if r.time == time:
                return r
        return None

    def cells(self) -> Iterable[Tuple[str, str, str | None]]:
        # (time, day, label) in time-slot order; None where a day is missing
        for r in self.rows:
            for d in self.days:
                yield r.time, d, r.cells.get(d)

    def subjects_on(self, day: str) -> List[str]:
        return [r.cells.get(day, "") for r in self.rows]

    def counts(self) -> Counter:
        return Counter(label for _, _, label in self.cells() if label is not None)

    def to_records(self) -> List[Dict[str, str]]:
        return [r.to_record() for r in self.rows]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], days: Sequence[str] = WEEKDAYS) -> "Timetable":
        return cls([TimetableRow.from_record(r, days) for r in records], tuple(days))


def add_class(
    rows: Sequence[TimetableRow],
    time: str,
    day: str,
    subject: str,
    days: Sequence[str] = WEEKDAYS,
) -> List[TimetableRow]:
    """Place ``subject`` at (time, day), creating the time row when missing.

    Returns a new list sorted by clock time; the input rows are not touched.
    """
    if not time or not day or not subject:
        raise TimetableEditError("Please fill all fields")
    if day not in days:
        raise TimetableEditError(f"Unknown day: {day}")
    out = [TimetableRow(r.time, dict(r.cells)) for r in rows]
    target = next((r for r in out if r.time == time), None)
    if target is None:
        target = TimetableRow(time, {d: FREE for d in days})
        out.append(target)
    target[day] = subject
    out.sort(key=lambda r: clock_key(r.time))
    return out
