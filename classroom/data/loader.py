from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..models.period import TIME_SLOTS, WEEKDAYS
from ..models.rules import Rules
from .store import JsonStore


@dataclass
class LoadedConfig:
    rules: Rules
    time_slots: Tuple[str, ...]
    days: Tuple[str, ...]


def store_path(root: Path) -> Path:
    return root / "data" / "store.json"


def open_store(root: Path) -> JsonStore:
    return JsonStore(store_path(root))


def load_toml(path: Path) -> Dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def load_config(root: Path, rules_path: Path | None = None) -> LoadedConfig:
    """Read rule overrides and the slot grid from ``configs/rules.toml``.

    A missing file means defaults throughout.
    """
    path = rules_path or (root / "configs" / "rules.toml")
    data: Dict[str, Any] = {}
    if path.exists():
        data = load_toml(path)
    else:
        logging.getLogger(__name__).info(f"No rules config at {path}; using defaults")
    grid = data.get("grid", {}) or {}
    time_slots: List[str] = list(grid.get("time_slots", TIME_SLOTS))
    days: List[str] = list(grid.get("days", WEEKDAYS))
    return LoadedConfig(
        rules=Rules.merged(data.get("rules", {}) or {}),
        time_slots=tuple(time_slots),
        days=tuple(days),
    )
