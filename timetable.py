#!/usr/bin/env python3
"""VKU timetable planner.

Loads the course section catalog, keeps a personal selection of sections
between runs, warns about schedule conflicts and exports the result as text.
"""

import argparse
import logging
import os
import sys

from catalog import (
    AppsScriptSource,
    CatalogSource,
    CatalogUnavailableError,
    CourseSection,
    CsvSource,
    PublishedSheetSource,
    load_catalog,
)
from exporter import GridExporter, TextExporter
from planner import JsonFileStore, Outcome, PlannerSession, SectionFilter

DEFAULT_SOURCE_URL = (
    "https://script.google.com/macros/s/AKfycbxlQS8eFwXPQAzw92nXwwdFUV_q9uEk4o9RPD"
    "cwokB25HXyWABzFaKwQHlsn7Rqq6o/exec"
)
DEFAULT_CSV_PATH = "tin_chi.csv"
DEFAULT_STATE_PATH = "timetable_state.json"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(verbose: bool) -> str:
    """DEBUG for --verbose, else LOG_LEVEL; unknown level names fall back to WARNING."""
    if verbose:
        return "DEBUG"
    level = os.getenv("LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        print(f"Warning: Unknown LOG_LEVEL '{level}', using WARNING.", file=sys.stderr)
        return "WARNING"
    return level


def setup_logging(verbose: bool) -> None:
    """Configure console logging."""
    logging.basicConfig(level=resolve_log_level(verbose), format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def build_sources(args: argparse.Namespace) -> list[CatalogSource]:
    """Data sources in priority order: JSON endpoint, published sheet, CSV."""
    sources: list[CatalogSource] = []
    if args.url:
        sources.append(AppsScriptSource(args.url))
    if args.sheet_url:
        sources.append(PublishedSheetSource(args.sheet_url))
    if args.csv:
        sources.append(CsvSource(args.csv))
    return sources


def confirm(question: str) -> bool:
    answer = input(f"{question} [y/N]: ").strip().lower()
    return answer in ("y", "yes")


def describe(session: PlannerSession, section: CourseSection) -> str:
    """One line summary of a section for the list view."""
    mark = "x" if session.is_selected(section.id) else " "

    if section.is_full:
        status = "FULL"
    elif not session.is_selected(section.id) and session.conflicts_for(section):
        status = "CONFLICT"
    else:
        status = "available"

    return (
        f"[{mark}] {section.id:<20} {section.title} | {section.instructor} | "
        f"{section.raw_schedule} | {section.enrolled}/{section.capacity} "
        f"({section.remaining} left) | "
        f"{status} | {session.color_for(section)}"
    )


def apply_toggles(session: PlannerSession, section_ids: list[str]) -> None:
    for section_id in section_ids:
        result = session.toggle(section_id)

        if result.outcome is Outcome.NOT_FOUND:
            print(f"Warning: No section with id '{section_id}'.", file=sys.stderr)
        elif result.outcome is Outcome.REJECTED_FULL:
            print(f"Warning: {result.section.title} is full.", file=sys.stderr)
        elif result.outcome is Outcome.REMOVED:
            print(f"Removed: {result.section.title}")
        else:
            if result.conflict_title:
                print(f"Warning: {result.section.title} conflicts with {result.conflict_title}.")
            print(f"Added: {result.section.title}")


def main() -> None:
    """Main entry point for the timetable planner."""
    parser = argparse.ArgumentParser(
        description="Plan a personal VKU timetable from the course section catalog.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 timetable.py --list --search "lập trình" --filter available
  python3 timetable.py --toggle 1234-1-5 --toggle 2210-2-9 --grid
  python3 timetable.py --url "" --csv tin_chi.csv --export my_timetable.txt
        """
    )

    parser.add_argument(
        "--url",
        default=os.getenv("VKU_TIMETABLE_URL", DEFAULT_SOURCE_URL),
        help="Apps Script endpoint returning the catalog as JSON (empty to skip)"
    )

    parser.add_argument(
        "--sheet-url",
        default=os.getenv("VKU_TIMETABLE_SHEET_URL", ""),
        help="URL of the sheet published as a web page (optional)"
    )

    parser.add_argument(
        "--csv",
        default=os.getenv("VKU_TIMETABLE_CSV", DEFAULT_CSV_PATH),
        help=f"Path or URL of the CSV export used as fallback (default: {DEFAULT_CSV_PATH})"
    )

    parser.add_argument(
        "--state",
        default=os.getenv("VKU_TIMETABLE_STATE", DEFAULT_STATE_PATH),
        help=f"File keeping the selection between runs (default: {DEFAULT_STATE_PATH})"
    )

    parser.add_argument(
        "-l", "--list",
        action="store_true",
        help="List course sections"
    )

    parser.add_argument(
        "-s", "--search",
        default="",
        help="Only list sections whose title or instructor contains this text"
    )

    parser.add_argument(
        "-f", "--filter",
        choices=[kind.value for kind in SectionFilter],
        default=SectionFilter.ALL.value,
        help="Only list all, available (not full) or selected sections"
    )

    parser.add_argument(
        "-t", "--toggle",
        action="append",
        default=[],
        metavar="ID",
        help="Add the section to the timetable, or remove it if already selected (repeatable)"
    )

    parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove all selected sections"
    )

    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation"
    )

    parser.add_argument(
        "-g", "--grid",
        action="store_true",
        help="Print the weekly timetable grid"
    )

    parser.add_argument(
        "-o", "--export",
        default=None,
        help="Write the selected sections to a text file"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    setup_logging(args.verbose)

    sources = build_sources(args)
    if not sources:
        print("Error: No data source configured.", file=sys.stderr)
        sys.exit(1)

    try:
        catalog = load_catalog(sources)
        print(f"Loaded {len(catalog)} course sections.")

        session = PlannerSession(catalog, JsonFileStore(args.state))
        restored = session.restore()
        if restored:
            print(f"Restored {len(restored)} selected section(s).")

        if args.clear and session.selected:
            if args.yes or confirm("Remove all selected sections?"):
                session.clear()
                print("Selection cleared.")

        apply_toggles(session, args.toggle)

        if args.list or args.search or args.filter != SectionFilter.ALL.value:
            visible = session.visible(args.search, SectionFilter(args.filter))
            print(f"\n{len(visible)} section(s):")
            for section in visible:
                print(describe(session, section))

        for first, second in session.conflicting_pairs():
            print(f"Warning: Schedule conflict between {first.title} and {second.title}.")

        if args.grid:
            print()
            print(GridExporter().transform(session.selected), end="")

        if args.export:
            output_path = args.export
            if not output_path.lower().endswith(".txt"):
                output_path = f"{output_path}.txt"

            if not session.selected:
                print("Warning: No sections selected, nothing to export.")
            else:
                exporter = TextExporter()
                exporter.transform(session.selected)
                exporter.save(output_path)
                print(f"Timetable saved to: {output_path}")

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except CatalogUnavailableError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
