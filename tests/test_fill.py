from __future__ import annotations

import pytest

from classroom.errors import EmptySubjectsWarning
from classroom.models import FREE_PERIOD, LUNCH_BREAK, TIME_SLOTS, WEEKDAYS, Subject
from classroom.scheduler import generate_timetable


def test_two_subject_week() -> None:
    subjects = [Subject("Math", 1), Subject("Art", 5)]
    rows = generate_timetable(subjects)

    assert [r.time for r in rows] == list(TIME_SLOTS)
    assert len(rows) == 7
    for r in rows:
        assert set(r.to_record()) == {"time", *WEEKDAYS}
    lunch = next(r for r in rows if r.time == "13:00")
    assert all(lunch[d] == LUNCH_BREAK for d in WEEKDAYS)

    labels = [r[d] for r in rows for d in WEEKDAYS]
    assert labels.count("Math") == 3
    assert labels.count("Art") == 3
    assert labels.count(LUNCH_BREAK) == 5
    assert labels.count(FREE_PERIOD) == 24


def test_first_row_alternates_by_frequency() -> None:
    rows = generate_timetable([Subject("Math", 1), Subject("Art", 5)])
    first = rows[0]
    assert [first[d] for d in WEEKDAYS] == ["Math", "Art", "Math", "Art", "Math"]
    second = rows[1]
    assert second["Monday"] == "Art"
    assert second["Tuesday"] == FREE_PERIOD


def test_empty_subjects_warn_and_return_nothing() -> None:
    with pytest.warns(EmptySubjectsWarning):
        assert generate_timetable([]) == []


def test_single_subject_once_per_day() -> None:
    rows = generate_timetable([Subject("Math", 1)], {"balance_subjects": False})
    for d in WEEKDAYS:
        day = [r[d] for r in rows]
        assert day.count("Math") == 1
        assert day.count(FREE_PERIOD) == len(rows) - 2  # minus Math and lunch


def test_same_input_gives_same_output() -> None:
    subjects = [Subject("Physics", 2), Subject("Math", 1), Subject("Art", 5), Subject("History", 3)]
    a = generate_timetable(subjects, {"lunchBreak": "12:00"})
    b = generate_timetable(subjects, {"lunchBreak": "12:00"})
    assert [r.to_record() for r in a] == [r.to_record() for r in b]


def test_custom_grid() -> None:
    rows = generate_timetable(
        [Subject("Math", 1), Subject("Art", 2)],
        time_slots=["08:00", "09:00"],
        days=["Saturday"],
    )
    assert [r.to_record() for r in rows] == [
        {"time": "08:00", "Saturday": "Math"},
        {"time": "09:00", "Saturday": "Art"},
    ]
