"""
Build the organisations database used by the autocomplete lookup.

Usage:
    python -m api.seed                           # demo organisations
    python -m api.seed --db data/orgs.sqlite --csv organisations.csv

The CSV needs ``id`` and ``name`` columns.  Existing ids are replaced.
"""

import argparse
import csv
import sys
from pathlib import Path

from api.database import init_db
from utils.config import AppConfig

DEMO_ORGANISATIONS: list[tuple[str, str]] = [
    ("ORG-0001", "John Smith Associates"),
    ("ORG-0002", "Johnson Ltd"),
    ("ORG-0003", "St John's Hospice"),
    ("ORG-0004", "Johnstone Research Trust"),
    ("ORG-0005", "Cardiff University"),
    ("ORG-0006", "University of Edinburgh"),
    ("ORG-0007", "Belfast Health and Social Care Trust"),
    ("ORG-0008", "Leeds Teaching Hospitals NHS Trust"),
    ("ORG-0009", "100% Renewables CIC"),
    ("ORG-0010", "North_East Data Lab"),
]


def read_csv(path: Path) -> list[tuple[str, str]]:
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = {"id", "name"} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"{path} is missing column(s): {', '.join(sorted(missing))}")
        return [(row["id"].strip(), row["name"].strip()) for row in reader if row["name"].strip()]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create the organisations lookup database."
    )
    parser.add_argument(
        "--db",
        default=str(AppConfig.from_env().db_path),
        help="Path to the SQLite database (default: APP_DB_PATH or organisations.sqlite)",
    )
    parser.add_argument(
        "--csv",
        help="Load organisations from a CSV with id,name columns instead of the demo list",
    )
    args = parser.parse_args(argv)

    try:
        rows = read_csv(Path(args.csv)) if args.csv else DEMO_ORGANISATIONS
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    count = init_db(Path(args.db), rows)
    print(f"{args.db}: {count} organisations")
    return 0


if __name__ == "__main__":
    sys.exit(main())
