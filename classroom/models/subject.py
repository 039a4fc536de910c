from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .period import leading_int

PLACEHOLDER_NAME = "undefined"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subject:
    name: str
    semester: int = 1
    code: str | None = None

    @property
    def priority(self) -> int:
        # Lower semester = more important
        return self.semester

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Subject":
        name = record.get("name")
        if not name:
            logger.warning(f"Subject record without a name: {dict(record)}")
            name = PLACEHOLDER_NAME
        semester = leading_int(record.get("semester")) or 1
        code = record.get("code")
        return cls(name=str(name), semester=semester, code=str(code) if code else None)
