from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

SUBJECTS_KEY = "subjects"
TIMETABLE_KEY = "timetableData"
ATTENDANCE_KEY = "attendance"


def students_key(code: str) -> str:
    return f"students_{code}"


def attendance_key(code: str) -> str:
    return f"attendance_{code}"


class JsonStore:
    """Key-value storage kept in a single JSON object on disk.

    Every call reads (or rewrites) the whole file. A missing file reads as an
    empty store; an unreadable one is logged and also reads as empty.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Storage read error for {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Storage file {self.path} does not hold a JSON object")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> bool:
        try:
            text = json.dumps(data, indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Storage write error for {self.path}: {e}")
            return False
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        data = self._read()
        data[key] = value
        return self._write(data)

    def remove(self, key: str) -> bool:
        data = self._read()
        if key not in data:
            return False
        del data[key]
        return self._write(data)

    def keys(self) -> List[str]:
        return list(self._read())
