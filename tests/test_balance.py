from __future__ import annotations

import logging

import pytest

from classroom.models import FREE_PERIOD, WEEKDAYS, Subject, TimetableRow
from classroom.scheduler import balance_notices, generate_timetable, subject_frequency


def _lopsided_rows() -> list[TimetableRow]:
    return [
        TimetableRow("09:00", {d: "A" for d in WEEKDAYS}),
        TimetableRow(
            "10:00",
            {"Monday": "A", "Tuesday": "A", "Wednesday": "B", "Thursday": "C", "Friday": FREE_PERIOD},
        ),
    ]


def test_subject_frequency_counts_grid() -> None:
    subjects = [Subject("A"), Subject("B"), Subject("C"), Subject("D")]
    assert subject_frequency(_lopsided_rows(), subjects) == {"A": 7, "B": 1, "C": 1, "D": 0}


def test_notices_only_beyond_threshold() -> None:
    subjects = [Subject("A"), Subject("B"), Subject("C")]
    assert balance_notices(_lopsided_rows(), subjects) == ["Subject A needs rebalancing (7 vs avg 3)"]


def test_balance_check_leaves_grid_untouched() -> None:
    rows = _lopsided_rows()
    before = [r.to_record() for r in rows]
    balance_notices(rows, [Subject("A"), Subject("B"), Subject("C")])
    assert [r.to_record() for r in rows] == before


def test_notices_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="classroom.scheduler.balance")
    balance_notices(_lopsided_rows(), [Subject("A"), Subject("B"), Subject("C")])
    assert "Subject A needs rebalancing" in caplog.text


def test_generated_two_subject_grid_is_balanced() -> None:
    subjects = [Subject("Math", 1), Subject("Art", 5)]
    assert balance_notices(generate_timetable(subjects), subjects) == []
