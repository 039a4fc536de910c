from __future__ import annotations

import json
from pathlib import Path
from typing import Dict


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    with (outputs_dir / "validation.json").open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"row_count: {report.get('row_count')}")
    for key in ("lunch_violations", "missing_cells", "unknown_labels"):
        lines.append(f"{key}: {len(report.get(key, []) or [])}")
    repeats = report.get("repeat_in_day", {})
    lines.append("repeat_in_day:")
    if isinstance(repeats, dict):
        for day, subjects in repeats.items():
            lines.append(f"  - {day}: {', '.join(subjects)}")
    if "frequency_cap" in report:
        lines.append(f"frequency_cap: {report['frequency_cap']}")
    over = report.get("over_cap", {})
    lines.append(f"over_cap: {len(over)} entries")
    lines.append("subject_counts:")
    counts = report.get("subject_counts", {})
    if isinstance(counts, dict):
        for subj, c in counts.items():
            lines.append(f"  - {subj}: {c}")
    lines.append(f"free_periods: {report.get('free_periods')}")
    return "\n".join(lines)
