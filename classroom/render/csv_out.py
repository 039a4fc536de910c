from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Sequence

from ..models.period import WEEKDAYS
from ..models.timetable import TimetableRow


def csv_table(rows: Sequence[TimetableRow], days: Sequence[str] = WEEKDAYS) -> str:
    # Header: Time,Monday,...,Friday
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Time", *days])
    for r in rows:
        writer.writerow([r.time, *(r.get(d, "") for d in days)])
    return buf.getvalue()


def write_csv(text: str, outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "timetable.csv"
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
    return path
