from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from classroom.cli.main import app
from classroom.data import JsonStore

runner = CliRunner()


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    root = Path(__file__).resolve().parents[1]
    shutil.copytree(root / "data", tmp_path / "data")
    shutil.copytree(root / "configs", tmp_path / "configs")
    return tmp_path


def test_generate_persists_timetable(project: Path) -> None:
    result = runner.invoke(app, ["generate", "--root", str(project)])
    assert result.exit_code == 0, result.output
    assert "Time,Monday,Tuesday,Wednesday,Thursday,Friday" in result.output
    rows = JsonStore(project / "data" / "store.json").get("timetableData")
    assert len(rows) == 7
    assert (project / "outputs" / "timetable.csv").exists()


def test_generate_without_subjects_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["generate", "--root", str(tmp_path)])
    assert result.exit_code == 1
    assert "Please add subjects first" in result.output


def test_add_class_then_export(project: Path) -> None:
    result = runner.invoke(app, ["add-class", "10:00", "Monday", "Chemistry", "--root", str(project)])
    assert result.exit_code == 0, result.output
    result = runner.invoke(app, ["export-csv", "--root", str(project)])
    assert result.exit_code == 0, result.output
    assert "10:00,Chemistry,Free,Free,Free,Free" in result.output


def test_add_class_rejects_bad_day(project: Path) -> None:
    result = runner.invoke(app, ["add-class", "10:00", "Sunday", "Chemistry", "--root", str(project)])
    assert result.exit_code == 1


def test_attendance_warnings(project: Path) -> None:
    result = runner.invoke(app, ["attendance", "--root", str(project)])
    assert result.exit_code == 0
    assert "Warning: Kofi's attendance is 33% (below 60%)" in result.output
    assert "Ama" not in result.output


def test_add_and_delete_subject(tmp_path: Path) -> None:
    result = runner.invoke(app, ["add-subject", "Biology", "BI101", "--semester", "2", "--root", str(tmp_path)])
    assert result.exit_code == 0, result.output
    result = runner.invoke(app, ["add-subject", "Biology again", "bi101", "--root", str(tmp_path)])
    assert result.exit_code == 1
    assert "already exists" in result.output
    result = runner.invoke(app, ["delete-subject", "BI101", "--root", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert JsonStore(tmp_path / "data" / "store.json").get("subjects") == []
    result = runner.invoke(app, ["delete-subject", "BI101", "--root", str(tmp_path)])
    assert result.exit_code == 1


def test_import_subjects_and_generate(tmp_path: Path) -> None:
    source = tmp_path / "subjects.txt"
    source.write_text("Mathematics | MA101 | 1\nArt - AR501 - 5\n\nMaths copy | ma101\n", encoding="utf-8")
    result = runner.invoke(app, ["import-subjects", str(source), "--generate", "--root", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "2 subject(s) imported" in result.output
    assert "Skipped existing codes: MA101" in result.output
    rows = JsonStore(tmp_path / "data" / "store.json").get("timetableData")
    assert len(rows) == 7
    assert rows[0]["Monday"] == "Mathematics"


def test_import_subjects_from_stdin(tmp_path: Path) -> None:
    result = runner.invoke(app, ["import-subjects", "-", "--root", str(tmp_path)], input="History\n")
    assert result.exit_code == 0, result.output
    assert JsonStore(tmp_path / "data" / "store.json").get("subjects")[0]["code"] == "HIS101"


def test_enroll_and_mark_attendance(project: Path) -> None:
    result = runner.invoke(app, ["enroll", "MA101", "Esi", "Yaw", "--root", str(project)])
    assert result.exit_code == 0, result.output
    result = runner.invoke(
        app, ["mark-attendance", "MA101", "Esi", "absent", "--date", "2024-06-05", "--root", str(project)]
    )
    assert result.exit_code == 0, result.output
    result = runner.invoke(app, ["attendance", "--root", str(project)])
    assert "Warning: Esi's attendance is 0% (below 60%)" in result.output
    result = runner.invoke(app, ["mark-attendance", "MA101", "Nobody", "present", "--root", str(project)])
    assert result.exit_code == 1
