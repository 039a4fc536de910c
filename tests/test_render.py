from __future__ import annotations

from pathlib import Path

from classroom.models import Subject
from classroom.render import csv_table, write_csv
from classroom.scheduler import generate_timetable


def test_csv_table_layout(tmp_path: Path) -> None:
    rows = generate_timetable([Subject("Math", 1), Subject("Art, Design", 5)])
    csv = csv_table(rows)
    lines = csv.splitlines()
    assert lines[0] == "Time,Monday,Tuesday,Wednesday,Thursday,Friday"
    assert len(lines) == 8
    assert lines[1].startswith("09:00,Math,")
    assert '"Art, Design"' in csv
    assert "13:00,Lunch Break,Lunch Break,Lunch Break,Lunch Break,Lunch Break" in lines

    path = write_csv(csv, tmp_path / "out")
    assert path.read_text(encoding="utf-8") == csv


def test_csv_table_empty_grid() -> None:
    assert csv_table([]) == "Time,Monday,Tuesday,Wednesday,Thursday,Friday\n"
