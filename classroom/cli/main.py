from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping

import typer

from ..data.loader import load_config, open_store
from ..data.store import ATTENDANCE_KEY, TIMETABLE_KEY
from ..data.subjects import SubjectCatalog
from ..errors import ClassroomError
from ..models.rules import Rules
from ..models.timetable import Timetable, add_class
from ..render.csv_out import csv_table, write_csv
from ..reports.attendance import analyze_attendance
from ..scheduler import balance_notices, generate_timetable
from ..validate.checks import validate_timetable
from ..validate.report import format_validation_report, write_validation_report


def _setup_logging(project_root: Path) -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "engine.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def run_pipeline(
    project_root: Path,
    *,
    rules_path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    outputs_dir: Path | None = None,
    persist: bool = False,
    log_level: int | None = None,
) -> tuple[str, str, str]:
    _setup_logging(project_root)
    if log_level is not None:
        logging.getLogger().setLevel(log_level)
    logger = logging.getLogger(__name__)

    config = load_config(project_root, rules_path)
    rules = config.rules
    if overrides:
        rules = Rules.merged({**rules.to_dict(), **overrides})
    store = open_store(project_root)
    subjects = SubjectCatalog(store).subjects()
    logger.info(f"Generating timetable for {len(subjects)} subjects with rules {rules.to_dict()}")

    rows = generate_timetable(subjects, rules, time_slots=config.time_slots, days=config.days)
    # Already logged during generation
    notices = balance_notices(rows, subjects, days=config.days, log=False)
    report = validate_timetable(rows, subjects, rules, config.days)

    outputs_dir = outputs_dir or (project_root / "outputs")
    write_validation_report(report, outputs_dir)
    csv = csv_table(rows, config.days)
    write_csv(csv, outputs_dir)
    records = Timetable(rows, config.days).to_records()
    json_dir = outputs_dir / "json"
    json_dir.mkdir(parents=True, exist_ok=True)
    with (json_dir / "timetable.json").open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=2)
    if persist and rows:
        store.set(TIMETABLE_KEY, records)
        logger.info(f"Saved {len(records)} timetable rows to {store.path}")

    audit_lines: List[str] = [f"Subjects: {len(subjects)}", f"Rows: {len(rows)}", "", "Balance:"]
    audit_lines.extend(notices or ["All subjects within balance threshold."])
    audit_text = "\n".join(audit_lines)
    with (outputs_dir / "audit.txt").open("w", encoding="utf-8") as f:
        f.write(audit_text)

    return csv, format_validation_report(report), audit_text


app = typer.Typer(add_completion=False, help="Classroom timetable generator")


def _overrides(**kwargs: Any) -> Dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


@app.command("generate")
def cli_generate(
    root: Path = typer.Option(Path("."), help="Project root holding data/ and configs/"),
    lunch_break: str | None = typer.Option(None, help="Slot time used for lunch"),
    no_repeat: bool | None = typer.Option(None, "--no-repeat/--allow-repeat", help="One class per subject per day"),
    balance: bool | None = typer.Option(None, "--balance/--no-balance", help="Cap weekly placements per subject"),
    prefer_morning: bool | None = typer.Option(
        None, "--prefer-morning/--no-prefer-morning", help="Favour low-semester subjects before noon"
    ),
    max_per_day: int | None = typer.Option(None, help="Classes per day cap (needs --enforce-max)"),
    enforce_max: bool | None = typer.Option(None, "--enforce-max/--no-enforce-max", help="Apply the per-day cap"),
    save: bool = typer.Option(True, help="Persist the result to the store"),
    log_level: str = typer.Option("INFO", help="Log level"),
) -> None:
    root = root.resolve()
    if not SubjectCatalog(open_store(root)).all():
        typer.echo("Please add subjects first", err=True)
        raise typer.Exit(code=1)
    level = getattr(logging, log_level.upper(), logging.INFO)
    csv, validation, audit = run_pipeline(
        root,
        overrides=_overrides(
            lunch_break=lunch_break,
            no_repeat_subject_same_day=no_repeat,
            balance_subjects=balance,
            prefer_morning_for_core=prefer_morning,
            max_classes_per_day=max_per_day,
            enforce_max_classes_per_day=enforce_max,
        ),
        persist=save,
        log_level=level,
    )
    typer.echo(csv)
    typer.echo(validation)
    typer.echo(audit)


@app.command("validate")
def cli_validate(root: Path = typer.Option(Path("."), help="Project root")) -> None:
    _, validation, _ = run_pipeline(root.resolve())
    typer.echo(validation)


@app.command("export-csv")
def cli_export_csv(root: Path = typer.Option(Path("."), help="Project root")) -> None:
    root = root.resolve()
    config = load_config(root)
    records = open_store(root).get(TIMETABLE_KEY, []) or []
    tt = Timetable.from_records(records, config.days)
    typer.echo(csv_table(tt.rows, config.days), nl=False)


@app.command("add-class")
def cli_add_class(
    time: str = typer.Argument(..., help="Slot time, e.g. 10:00"),
    day: str = typer.Argument(..., help="Weekday name"),
    subject: str = typer.Argument(..., help="Subject to place"),
    root: Path = typer.Option(Path("."), help="Project root"),
) -> None:
    root = root.resolve()
    config = load_config(root)
    store = open_store(root)
    tt = Timetable.from_records(store.get(TIMETABLE_KEY, []) or [], config.days)
    try:
        rows = add_class(tt.rows, time, day, subject, config.days)
    except ClassroomError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    store.set(TIMETABLE_KEY, Timetable(rows, config.days).to_records())
    typer.echo("Class added successfully")


@app.command("add-subject")
def cli_add_subject(
    name: str = typer.Argument(..., help="Subject name"),
    code: str = typer.Argument(..., help="Unique subject code, e.g. CS101"),
    semester: int = typer.Option(1, min=1, help="Semester; lower is scheduled first"),
    description: str = typer.Option("", help="Free-text description"),
    root: Path = typer.Option(Path("."), help="Project root"),
) -> None:
    catalog = SubjectCatalog(open_store(root.resolve()))
    try:
        catalog.add({"name": name, "code": code, "semester": str(semester), "description": description})
    except ClassroomError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo("Subject added successfully")


@app.command("delete-subject")
def cli_delete_subject(
    code: str = typer.Argument(..., help="Subject code"),
    root: Path = typer.Option(Path("."), help="Project root"),
) -> None:
    if not SubjectCatalog(open_store(root.resolve())).delete(code):
        typer.echo(f"No subject with code {code}", err=True)
        raise typer.Exit(code=1)
    typer.echo("Subject deleted successfully")


@app.command("import-subjects")
def cli_import_subjects(
    source: typer.FileText = typer.Argument(..., help="Lines of 'Name | CODE | Sem' or 'Name - CODE - Sem'; '-' for stdin"),
    generate: bool = typer.Option(False, "--generate", help="Generate and save a timetable after importing"),
    root: Path = typer.Option(Path("."), help="Project root"),
) -> None:
    root = root.resolve()
    lines = [l for l in source.read().splitlines() if l.strip()]
    if not lines:
        typer.echo("Please provide at least one subject line", err=True)
        raise typer.Exit(code=1)
    added, skipped = SubjectCatalog(open_store(root)).bulk_add(lines)
    typer.echo(f"{len(added)} subject(s) imported")
    if skipped:
        typer.echo(f"Skipped existing codes: {', '.join(skipped)}")
    if generate:
        csv, _, _ = run_pipeline(root, overrides={"maxClassesPerDay": 4, "lunchBreak": "13:00"}, persist=True)
        typer.echo(csv, nl=False)


@app.command("enroll")
def cli_enroll(
    code: str = typer.Argument(..., help="Subject code"),
    students: List[str] = typer.Argument(..., help="Student names"),
    root: Path = typer.Option(Path("."), help="Project root"),
) -> None:
    try:
        roster = SubjectCatalog(open_store(root.resolve())).enroll(code, students)
    except ClassroomError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{len(roster)} student(s) enrolled in {code}")


@app.command("mark-attendance")
def cli_mark_attendance(
    code: str = typer.Argument(..., help="Subject code"),
    student: str = typer.Argument(..., help="Enrolled student name"),
    status: str = typer.Argument(..., help="present or absent"),
    on: datetime | None = typer.Option(None, "--date", formats=["%Y-%m-%d"], help="Defaults to today"),
    root: Path = typer.Option(Path("."), help="Project root"),
) -> None:
    try:
        SubjectCatalog(open_store(root.resolve())).mark_attendance(code, student, status, on.date() if on else None)
    except ClassroomError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo("Attendance saved successfully")


@app.command("attendance")
def cli_attendance(root: Path = typer.Option(Path("."), help="Project root")) -> None:
    records = open_store(root.resolve()).get(ATTENDANCE_KEY, []) or []
    warnings = analyze_attendance(records)
    for w in warnings:
        typer.echo(w.message)
    if not warnings:
        typer.echo("No attendance warnings")


if __name__ == "__main__":  # pragma: no cover
    app()
