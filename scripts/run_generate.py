from __future__ import annotations

import argparse
from pathlib import Path
import sys

# Ensure project root on sys.path for direct script execution
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from classroom.cli.main import run_pipeline


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Generate the weekly timetable from data/store.json")
    ap.add_argument("--root", type=Path, default=root, help="Project root holding data/ and configs/")
    ap.add_argument("--rules", type=Path, default=None, help="Alternative rules TOML")
    ap.add_argument("--outputs", type=Path, default=None, help="Output directory (default <root>/outputs)")
    ap.add_argument("--no-save", action="store_true", help="Do not write the timetable back to the store")
    ap.add_argument("--quiet", action="store_true", help="Only print the validation summary")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    csv, validation, audit = run_pipeline(
        args.root,
        rules_path=args.rules,
        outputs_dir=args.outputs,
        persist=not args.no_save,
    )
    if not args.quiet:
        print(csv)
    print(validation)
    if not args.quiet:
        print(audit)
    return 0 if "row_count: 0" not in validation else 1


if __name__ == "__main__":
    sys.exit(main())
