"""Command-line interface for the roster helper."""

import argparse
import logging
import sys
from datetime import date, timedelta
from typing import Optional

from rosterhelper.analysis.conflict_analyzer import ConflictAnalyzer
from rosterhelper.domain.calendar import last_tuesday, week_start_from_offset
from rosterhelper.domain.errors import RosterError
from rosterhelper.domain.models import (
    DayAvailability,
    LeaveRequest,
    LeaveStatus,
    RosterWeek,
    StaffMember,
    default_availability,
)
from rosterhelper.output.pdf_generator import RosterPDFGenerator
from rosterhelper.output.report_generator import RosterReportGenerator
from rosterhelper.roster.builder import assign_staff, new_roster_week
from rosterhelper.storage.repository import JsonRosterStore

logger = logging.getLogger(__name__)


def create_sample_staff(count: int = 8, start_date: Optional[date] = None) -> list[StaffMember]:
    """Create sample staff for demos.

    Args:
        count: Number of staff members to create.
        start_date: Start of the demo week, used to place leave.
    """
    start_date = start_date or last_tuesday()
    names = [
        "Alice", "Bob", "Carol", "David", "Eve", "Frank", "Grace", "Henry",
        "Ivy", "Jack", "Kate", "Leo", "Mia", "Noah", "Olivia", "Paul",
    ]

    staff = []
    for i in range(count):
        name = names[i % len(names)]
        if i >= len(names):
            name = f"{name}{i // len(names) + 1}"

        availability = default_availability()
        if i % 4 == 1:
            # No early shifts on Thursdays
            availability[2] = DayAvailability(name="Thursday", early=False, mid=True, late=True)
        if i % 5 == 2:
            # Never works Sundays
            availability[5] = DayAvailability(name="Sunday", early=False, mid=False, late=False)

        leave = []
        if i % 6 == 3:
            leave.append(
                LeaveRequest(
                    start_date=start_date + timedelta(days=4),
                    end_date=start_date + timedelta(days=6),
                    reason="Away for the weekend",
                    status=LeaveStatus.APPROVED,
                    creation_date=start_date - timedelta(days=14),
                )
            )

        staff.append(
            StaffMember(
                id=f"S{i + 1:03d}",
                first_name=name,
                ideal_shifts=3 + i % 3,
                availability=availability,
                leave_requests=leave,
            )
        )
    return staff


def create_demo_week(start_date: date, staff: list[StaffMember]) -> RosterWeek:
    """Create a week and fill it round-robin from the staff list."""
    week = new_roster_week(start_date)
    if not staff:
        return week

    i = 0
    for day in week.days:
        for row in day.rows[:2]:
            for kind in day.active_slot_kinds():
                assign_staff(row.slots[kind], staff[i % len(staff)])
                i += 1
    return week


def print_report(week: RosterWeek, all_staff: list[StaffMember], pdf_path: Optional[str]) -> None:
    print(RosterReportGenerator().generate_to_string(week, all_staff))
    if pdf_path:
        print(f"Generating PDF: {pdf_path}")
        RosterPDFGenerator().generate(week, all_staff, pdf_path)
        print("  PDF created successfully!")


def run_demo(staff_count: int = 8, pdf_path: Optional[str] = None) -> None:
    """Flag a generated demo week and print the report."""
    start_date = last_tuesday()
    print(f"Generating demo roster for {staff_count} staff, week of {start_date}...")

    staff = create_sample_staff(staff_count, start_date)
    week = create_demo_week(start_date, staff)
    ConflictAnalyzer().evaluate(week, staff)
    print_report(week, staff, pdf_path)


def run_check(
    store_path: str,
    start_date: Optional[date] = None,
    week_offset: Optional[int] = None,
    pdf_path: Optional[str] = None,
) -> None:
    """Re-flag a stored week, save it back and print the report."""
    store = JsonRosterStore(store_path, analyzer=ConflictAnalyzer())
    if week_offset is not None:
        start_date = week_start_from_offset(week_offset, store.layout.epoch())
    week = store.find_roster_week(start_date or last_tuesday())

    store.save_roster_week(week)
    print_report(week, store.load_all_staff(), pdf_path)


def run_new_week(store_path: str, start_date: date) -> None:
    """Provision a week in a store if it does not exist yet."""
    store = JsonRosterStore(store_path, analyzer=ConflictAnalyzer())
    week = store.load_roster_week(start_date)
    print(f"Roster week {week.start_date} (id: {week.id}, offset: {week.week_offset})")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Roster Helper - roster conflict flagging",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                          Flag a demo week with 8 staff
  %(prog)s demo --count 12 --pdf r.pdf   Larger demo with PDF output

  %(prog)s new-week --store roster.json --start-date 2024-01-16
  %(prog)s check --store roster.json --start-date 2024-01-16
  %(prog)s check --store roster.json --week-offset 54
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    demo_parser = subparsers.add_parser("demo", help="Flag a generated demo week")
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=8,
        help="Number of staff to generate (default: 8)",
    )
    demo_parser.add_argument(
        "--pdf", "-o",
        type=str,
        help="Output PDF file path",
    )

    check_parser = subparsers.add_parser("check", help="Re-flag a stored week")
    check_parser.add_argument("--store", "-s", required=True, help="Path to the JSON store")
    week_group = check_parser.add_mutually_exclusive_group()
    week_group.add_argument(
        "--start-date", "-d",
        type=date.fromisoformat,
        help="Week start date (YYYY-MM-DD, default: current week)",
    )
    week_group.add_argument(
        "--week-offset", "-w",
        type=int,
        help="Week number counted from the roster epoch",
    )
    check_parser.add_argument("--pdf", "-o", type=str, help="Output PDF file path")

    new_week_parser = subparsers.add_parser("new-week", help="Create a week in a store")
    new_week_parser.add_argument("--store", "-s", required=True, help="Path to the JSON store")
    new_week_parser.add_argument(
        "--start-date", "-d",
        type=date.fromisoformat,
        required=True,
        help="Week start date (YYYY-MM-DD)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "demo":
            run_demo(args.count, args.pdf)
            return 0
        elif args.command == "check":
            run_check(args.store, args.start_date, args.week_offset, args.pdf)
            return 0
        elif args.command == "new-week":
            run_new_week(args.store, args.start_date)
            return 0
        else:
            parser.print_help()
            return 1
    except RosterError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
