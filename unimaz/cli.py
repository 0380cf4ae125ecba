"""
Command-line interface for the unimaz attendance core.

Usage:
    python -m unimaz normalize "Komp. müh. əsas."
    python -m unimaz absences "Döv. nəz."
    python -m unimaz set-absences "2025-W40|2|1|Dövrələr nəzəriyyəsi (mühazirə)" 2
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from unimaz.config import get_settings
from unimaz.services.academics import absence_status, calculate_absence_limits
from unimaz.services.attendance_store import get_attendance_store
from unimaz.services.subject_registry import get_subject_registry
from unimaz.utils.normalizers import normalize_subject_name


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="unimaz",
        description="Subject name matching and attendance tracking"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    normalize_parser = subparsers.add_parser("normalize", help="Print the normalized subject name")
    normalize_parser.add_argument("subject")

    resolve_parser = subparsers.add_parser("resolve", help="Print the canonical subject name")
    resolve_parser.add_argument("subject")

    absences_parser = subparsers.add_parser(
        "absences", help="Total absences for a subject across all spellings"
    )
    absences_parser.add_argument("subject")

    set_parser = subparsers.add_parser("set-absences", help="Set absences for one lesson key")
    set_parser.add_argument("key")
    set_parser.add_argument("count", type=int)

    for name, help_text in (
        ("increment", "Add one absence for a subject"),
        ("decrement", "Remove one absence for a subject"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("subject")

    grade_parser = subparsers.add_parser("grade", help="Show, set or remove the grade of a lesson key")
    grade_parser.add_argument("key")
    grade_parser.add_argument("value", nargs="?", type=float, default=None)
    grade_parser.add_argument("--remove", action="store_true", help="Remove the grade")

    limits_parser = subparsers.add_parser(
        "limits", help="Absence limits for an academic load JSON file"
    )
    limits_parser.add_argument("file", help="JSON list of {subject, total_hours}")

    subparsers.add_parser("export", help="Print the stored user data as JSON")

    import_parser = subparsers.add_parser("import", help="Replace user data from a JSON backup")
    import_parser.add_argument("file")

    subparsers.add_parser("clear", help="Delete all stored user data")

    return parser


def run_command(args: argparse.Namespace) -> int:
    """
    Execute a parsed command.

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    if args.command == "normalize":
        print(normalize_subject_name(args.subject))
        return 0

    if args.command == "resolve":
        canonical = get_subject_registry().resolve_canonical(args.subject)
        if canonical is None:
            print(f"No canonical subject for: {args.subject}")
            return 1
        print(canonical)
        return 0

    try:
        store = get_attendance_store()
    except ValueError as e:
        print(f"Storage configuration error: {e}")
        return 1

    if args.command == "limits":
        try:
            academic_load = json.loads(Path(args.file).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            print(f"Error: cannot read academic load: {e}")
            return 1
        limits = calculate_absence_limits(academic_load, get_settings().absence_limit_ratio)
        for subject, limit in limits.items():
            count = store.get_load_subject_absence_count(subject)
            print(f"{subject}: {count}/{limit} ({absence_status(count, limit)})")
    elif args.command == "absences":
        print(store.get_absence_count(args.subject))
    elif args.command == "set-absences":
        store.set_absence_count(args.key, args.count)
        print(store.get_specific_absence_count(args.key))
    elif args.command == "increment":
        print(store.increment_absence_count(args.subject))
    elif args.command == "decrement":
        print(store.decrement_absence_count(args.subject))
    elif args.command == "grade":
        if args.remove:
            store.remove_grade(args.key)
        elif args.value is not None:
            store.set_grade(args.key, args.value)
        grade = store.get_grade(args.key)
        print("-" if grade is None else grade)
    elif args.command == "export":
        print(store.export_user_data())
    elif args.command == "import":
        try:
            blob = Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            print(f"Error: cannot read backup: {e}")
            return 1
        if not store.import_user_data(blob):
            print("Error: backup is not valid user data")
            return 1
    elif args.command == "clear":
        store.clear_all_user_data()
    else:
        print(f"Unknown command: {args.command}")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Configuration error: {e}")
        return 1

    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
    return run_command(args)


if __name__ == "__main__":
    sys.exit(main())
