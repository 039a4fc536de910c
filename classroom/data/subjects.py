from __future__ import annotations

import logging
import re
from datetime import date as date_cls, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from ..errors import DuplicateSubjectError, SubjectCatalogError
from ..models.subject import Subject
from .store import ATTENDANCE_KEY, SUBJECTS_KEY, JsonStore, attendance_key, students_key

ATTENDANCE_STATUSES = {"present", "absent"}

_SEMESTER = re.compile(r"^[0-9]+$")
_NOT_ALNUM = re.compile(r"[^A-Za-z0-9]")


def _split(raw: str, sep: str) -> List[str]:
    return [p.strip() for p in raw.split(sep) if p.strip() != ""]


def parse_subject_line(line: str, index: int) -> Dict[str, str] | None:
    """Parse one bulk-import line into a subject record.

    Accepted forms are ``Name | CODE | Sem`` and ``Name - CODE - Sem``; code and
    semester are optional. A missing code becomes the first three letters of
    the name plus ``100 + index``, and a semester that is not all digits
    becomes "1". Blank lines give ``None``.
    """
    raw = line.strip()
    if not raw:
        return None
    parts = _split(raw, "|")
    if not parts:
        return None
    name = parts[0]
    code = parts[1].upper() if len(parts) >= 2 else ""
    semester = parts[2] if len(parts) >= 3 else "1"

    if not code and "-" in raw:
        parts = _split(raw, "-")
        if len(parts) >= 2:
            name = parts[0]
            code = parts[1].upper()
            if len(parts) >= 3:
                semester = parts[2]

    if not code:
        prefix = _NOT_ALNUM.sub("", name).upper()[:3] or "SUB"
        code = f"{prefix}{100 + index}"

    if not _SEMESTER.match(semester):
        semester = "1"
    return {"name": name, "code": code, "semester": semester, "description": ""}


class SubjectCatalog:
    def __init__(self, store: JsonStore):
        self.store = store

    def all(self) -> List[Dict[str, Any]]:
        return list(self.store.get(SUBJECTS_KEY, []) or [])

    def subjects(self) -> List[Subject]:
        return [Subject.from_record(r) for r in self.all()]

    def find(self, code: str) -> Dict[str, Any] | None:
        for r in self.all():
            if str(r.get("code", "")).lower() == code.lower():
                return r
        return None

    def add(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        if not record.get("name") or not record.get("code"):
            raise SubjectCatalogError("Subject name and code are required")
        code = str(record["code"])
        if self.find(code) is not None:
            raise DuplicateSubjectError(code)
        now = datetime.now(timezone.utc)
        entry = dict(record)
        entry["id"] = int(now.timestamp() * 1000)
        entry["createdAt"] = now.isoformat()
        subjects = self.all()
        subjects.append(entry)
        self.store.set(SUBJECTS_KEY, subjects)
        logging.getLogger(__name__).info(f"Added subject {code} ({entry['name']})")
        return entry

    def bulk_add(self, lines: Iterable[str]) -> Tuple[List[Dict[str, Any]], List[str]]:
        """Import subject lines; returns (added records, skipped duplicate codes)."""
        logger = logging.getLogger(__name__)
        subjects = self.all()
        seen = {str(r.get("code", "")).upper() for r in subjects}
        now = datetime.now(timezone.utc)
        added: List[Dict[str, Any]] = []
        skipped: List[str] = []
        lines = [l.strip() for l in lines if l.strip()]
        for idx, line in enumerate(lines):
            record = parse_subject_line(line, idx + 1)
            if record is None:
                continue
            if record["code"].upper() in seen:
                skipped.append(record["code"])
                logger.info(f"Skipping duplicate subject code {record['code']}")
                continue
            entry: Dict[str, Any] = dict(record)
            entry["id"] = int(now.timestamp() * 1000) + idx
            entry["createdAt"] = now.isoformat()
            seen.add(record["code"].upper())
            subjects.append(entry)
            added.append(entry)
        self.store.set(SUBJECTS_KEY, subjects)
        logger.info(f"{len(added)} subject(s) imported")
        return added, skipped

    def delete(self, code: str) -> bool:
        subjects = self.all()
        kept = [r for r in subjects if r.get("code") != code]
        if len(kept) == len(subjects):
            return False
        self.store.set(SUBJECTS_KEY, kept)
        # Drop the per-subject roster and attendance
        self.store.remove(students_key(code))
        self.store.remove(attendance_key(code))
        logging.getLogger(__name__).info(f"Deleted subject {code}")
        return True

    def _require(self, code: str) -> str:
        record = self.find(code)
        if record is None:
            raise SubjectCatalogError(f"Unknown subject code: {code}")
        return str(record["code"])

    def students(self, code: str) -> List[str]:
        return list(self.store.get(students_key(code), []) or [])

    def enroll(self, code: str, names: Iterable[str]) -> List[str]:
        code = self._require(code)
        roster = self.students(code)
        for name in names:
            name = name.strip()
            if name and name not in roster:
                roster.append(name)
        self.store.set(students_key(code), roster)
        return roster

    def mark_attendance(
        self, code: str, student: str, status: str, on: date_cls | None = None
    ) -> Dict[str, str]:
        """Record one attendance mark for an enrolled student.

        The mark goes to the subject's own log and to the school-wide log
        read by the attendance report.
        """
        code = self._require(code)
        status = status.strip().lower()
        if status not in ATTENDANCE_STATUSES:
            raise SubjectCatalogError(f"Unknown attendance status: {status}")
        if student not in self.students(code):
            raise SubjectCatalogError(f"{student} is not enrolled in {code}")
        record = {
            "studentName": student,
            "subject": code,
            "date": (on or date_cls.today()).isoformat(),
            "status": status,
        }
        for key in (attendance_key(code), ATTENDANCE_KEY):
            log = list(self.store.get(key, []) or [])
            log.append(record)
            self.store.set(key, log)
        return record
