#!/usr/bin/env python3
"""Detect physically impossible fingerings in chord data files.

Scans TypeScript, JSON or Python sources for fingering objects
(``frets``/``fingers``/``baseFret``) and reports records that use more than
four fingers, leave their 4-fret window, or carry invalid finger numbers.

Usage:
    python scripts/detect_fingering_issues.py <file> [<file> ...]

Examples:
    python scripts/detect_fingering_issues.py src/lib/chords/cagedChords.ts
    python scripts/detect_fingering_issues.py chords.json --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from chord_fingering.validator import (
    FingeringRecord,
    extract_fingering_records,
    format_report,
    validate_fingering_dataset,
)


def collect_records(paths: list[Path]) -> list[FingeringRecord]:
    """Extract fingering records from every readable file."""
    records: list[FingeringRecord] = []
    for path in paths:
        if not path.exists():
            print(f"File not found: {path}", file=sys.stderr)
            continue
        found = extract_fingering_records(path.read_text(encoding="utf-8"), source=path.name)
        print(f"=== {path.name} ===", file=sys.stderr)
        print(f"Found {len(found)} fingerings", file=sys.stderr)
        records.extend(found)
    return records


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Detect fingering issues in chord data files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s src/lib/chords/standardChords.ts src/lib/chords/cagedChords.ts
  %(prog)s chords.json --json
        """,
    )
    parser.add_argument(
        "files",
        type=Path,
        nargs="+",
        help="Source files containing fingering objects",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print issues as JSON instead of a text report",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    report = validate_fingering_dataset(collect_records(args.files))

    if args.json:
        data = {
            "total_records": report.total_records,
            "skipped": report.skipped,
            "issues": {issue_type: [asdict(issue) for issue in found] for issue_type, found in report.issues.items()},
        }
        print(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        print(format_report(report))

    return 0 if report.is_clean else 1


if __name__ == "__main__":
    sys.exit(main())
