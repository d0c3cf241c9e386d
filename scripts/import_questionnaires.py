"""Import questionnaire templates from a JSON file.

Usage:
    python scripts/import_questionnaires.py data/questionnaires-import.json \
        --doctor dokter@klinik.id [--mode skip|upsert|force] [--dry-run]

The file holds either a list of templates or {"templates": [...]}, each
with title, jenis_kuesioner, questions and resultTiers. All templates are
assigned to the target doctor.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from medscreen.core.logging import setup_logging
from medscreen.db.session import AsyncSessionLocal
from medscreen.services.importer import (
    ImportFileError,
    ImportMode,
    extract_templates,
    find_doctor,
    import_templates,
)


async def run(path: Path, doctor_ref: str, mode: ImportMode, dry_run: bool) -> int:
    """Run the import and print a summary. Returns the process exit code."""
    try:
        templates = extract_templates(json.loads(path.read_text(encoding="utf-8")))
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in {path}: {e}")
        return 1
    except ImportFileError as e:
        print(str(e))
        return 1

    if not templates:
        print("No templates to import.")
        return 0

    async with AsyncSessionLocal() as session:
        doctor = await find_doctor(session, doctor_ref)
        if doctor is None:
            print(f"Doctor not found: {doctor_ref}")
            return 1

        print("=" * 60)
        print("QUESTIONNAIRE IMPORT")
        print("=" * 60)
        print(f"File: {path}")
        print(f"Target doctor: {doctor.email} ({doctor.id})")
        print(f"Mode: {mode.value} | Dry-run: {dry_run}")
        print(f"Templates in file: {len(templates)}")
        print()

        report = await import_templates(session, doctor, templates, mode, dry_run)

    if report.refused:
        print("The file still holds the example template. Nothing imported.")
        return 1

    print("-" * 60)
    for action in report.actions:
        print(action)
    print("-" * 60)
    print(f"created={report.created} | updated={report.updated} | skipped={report.skipped}")
    if dry_run:
        print("Dry-run: no changes were written.")
    return 0


def main() -> None:
    """Main entry point for the import script."""
    parser = argparse.ArgumentParser(description="Import questionnaire templates")
    parser.add_argument("file", type=Path, help="JSON file with the templates")
    parser.add_argument(
        "--doctor",
        required=True,
        help="Email or id of the doctor who will own the templates",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ImportMode],
        default=ImportMode.SKIP.value,
        help="What to do with templates that already exist",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would happen without writing",
    )

    args = parser.parse_args()
    if not args.file.exists():
        parser.error(f"File not found: {args.file}")

    setup_logging()
    sys.exit(asyncio.run(run(args.file, args.doctor, ImportMode(args.mode), args.dry_run)))


if __name__ == "__main__":
    main()
