#!/usr/bin/env python3
"""
Unified CLI for home maintenance tracking.

Commands:
  status       - Rank categories by how overdue their maintenance is
  history      - View service records for a category
  log          - Add a new service record
  categories   - List categories with their recommended intervals
  add-category - Create empty categories
  pdf          - Export a record's attached PDF
"""

import argparse
import logging
import os
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from models import (
    Status,
    UrgencyEntry,
    MaintenanceRecord,
    load_category_config,
    open_store,
    parse_date,
    rank_store,
)
from models.calculations import as_utc, service_date_key
from settings import load_settings

DEFAULT_CATEGORIES = ["Plumbing", "Electrical", "Heating"]

# =============================================================================
# Formatting helpers
# =============================================================================


def format_days(days: Optional[int]) -> str:
    """Format a day count for display."""
    return f"{days:,d}" if days is not None else "-"


def format_overdue(entry: UrgencyEntry) -> str:
    """Format overdue days for display (e.g., '20d over' or '45d left')."""
    if entry.overdue_days is None:
        return "-"
    if entry.overdue_days >= 0:
        return f"{entry.overdue_days:,d}d over"
    return f"{abs(entry.overdue_days):,d}d left"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_now(value: Optional[str]) -> datetime:
    """Reference instant for ranking: --as-of value or the current time."""
    if not value:
        return datetime.now(timezone.utc)
    moment = parse_date(value)
    if moment is None:
        raise ValueError(f"Invalid date: {value}")
    return moment


# =============================================================================
# Status command
# =============================================================================


def make_status_table(entries: List[UrgencyEntry]) -> List[List[str]]:
    """Convert urgency entries to table rows."""
    rows = []
    for entry in entries:
        rows.append(
            [
                entry.category,
                entry.last_service_date or "-",
                format_days(entry.days_since),
                format_days(entry.interval_days),
                entry.due_date or "-",
                format_overdue(entry),
            ]
        )
    return rows


def cmd_status(args, store, config):
    """Rank categories by how overdue their maintenance is."""
    try:
        now = parse_now(args.as_of)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    entries = rank_store(store, config, now)

    print(f"Home: {args.home}")
    print(f"As of: {now.date().isoformat()}")
    print(f"Categories: {len(store.list_categories())} ({len(config)} configured)")
    print()

    headers = ["Category", "Last Service", "Days Since", "Interval", "Due", "Overdue"]
    groups = [
        ("OVERDUE", Status.OVERDUE),
        ("DUE SOON", Status.DUE_SOON),
        ("OK", Status.OK),
    ]
    for title, status in groups:
        matching = [e for e in entries if e.status_with(args.due_soon_days) == status]
        if matching:
            print(f"{title}:")
            print(tabulate(make_status_table(matching), headers=headers, tablefmt="simple"))
            print()

    unknown = [e for e in entries if e.status == Status.UNKNOWN]
    if unknown:
        print("UNKNOWN (no history):")
        for entry in unknown:
            print(f"  {entry.category}")
        print()

    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(records: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert records to table rows."""
    rows = []
    for record in records:
        rows.append(
            [
                str(record.record_id) if record.record_id is not None else "-",
                record.date,
                record.type,
                record.company,
                record.pdf_name or "-",
                truncate(record.notes),
            ]
        )
    return rows


def cmd_history(args, store, config):
    """View service records for a category."""
    if args.category not in store.list_categories():
        print(f"Error: Unknown category '{args.category}'")
        return 1

    since = None
    if args.since:
        since = parse_date(args.since)
        if since is None:
            print(f"Error: Invalid date '{args.since}'")
            return 1

    records = store.records_for(args.category)
    if not args.asc:
        records = list(reversed(records))

    if since is not None:
        # Undated records fall out of a --since filter
        cutoff = (1, as_utc(since))
        records = [r for r in records if service_date_key(r.date) >= cutoff]

    category_config = config.get(args.category)
    print(f"Category: {args.category}")
    if category_config:
        print(f"Recommended interval: {category_config.interval_days} days")
    if args.since:
        print(f"Showing: {len(records)} (filtered)")
    print()

    if not records:
        print("No records found.")
        return 0

    headers = ["ID", "Date", "Type", "Company", "PDF", "Notes"]
    print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args, store, config):
    """Add a new service record."""
    if args.category not in store.list_categories():
        print(f"Error: Unknown category '{args.category}'")
        print("\nAvailable categories:")
        for name in store.list_categories():
            print(f"  {name}")
        return 1

    record_date = args.date or date.today().isoformat()
    if parse_date(record_date) is None:
        print(f"Error: Invalid date '{record_date}'")
        return 1

    pdf_name = None
    pdf_data = None
    if args.pdf:
        if not args.pdf.exists():
            print(f"Error: File not found: {args.pdf}")
            return 1
        pdf_name = args.pdf.name
        pdf_data = args.pdf.read_bytes()

    record = MaintenanceRecord(
        category=args.category,
        date=record_date,
        company=args.company,
        type=args.type,
        notes=args.notes,
        pdf_name=pdf_name,
        pdf_data=pdf_data,
    )

    # Show what will be added
    print(f"Adding record to {args.category}:")
    print(f"  Date:    {record.date}")
    print(f"  Company: {record.company}")
    print(f"  Type:    {record.type}")
    if record.notes:
        print(f"  Notes:   {record.notes}")
    if record.pdf_name:
        print(f"  PDF:     {record.pdf_name}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    stored = store.add_record(record)
    print(f"Record {stored.record_id} saved.")

    return 0


# =============================================================================
# Categories command
# =============================================================================


def make_categories_table(names: List[str], config) -> List[List[str]]:
    """Rows for every category known to the store or the config."""
    known = set(names)
    rows = []
    for name in sorted(known | set(config)):
        category_config = config.get(name)
        if name not in known:
            note = "no records folder"
        elif category_config is None:
            note = "not configured (unranked)"
        else:
            note = ""
        rows.append(
            [
                name,
                format_days(category_config.interval_days) if category_config else "-",
                truncate(category_config.description, 40) if category_config else "-",
                note,
            ]
        )
    return rows


def cmd_categories(args, store, config):
    """List categories with their recommended intervals."""
    rows = make_categories_table(store.list_categories(), config)
    if not rows:
        print("No categories found.")
        return 0

    headers = ["Category", "Interval (days)", "Description", "Note"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_add_category(args, store, config):
    """Create empty categories."""
    names = args.names or DEFAULT_CATEGORIES
    for name in names:
        store.ensure_category(name)
        print(f"Category ready: {name}")
    return 0


# =============================================================================
# PDF command
# =============================================================================


def cmd_pdf(args, store, config):
    """Export a record's attached PDF."""
    pdf = store.get_pdf(args.category, args.record_id)
    if pdf is None:
        print(f"Error: No PDF for {args.category} record {args.record_id}")
        return 1

    filename, data = pdf
    output = args.output or Path(filename)
    output.write_bytes(data)
    print(f"Wrote {output} ({len(data):,d} bytes)")
    return 0


# =============================================================================
# Main
# =============================================================================

COMMANDS = {
    "status": cmd_status,
    "history": cmd_history,
    "log": cmd_log,
    "categories": cmd_categories,
    "add-category": cmd_add_category,
    "pdf": cmd_pdf,
}


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Home maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s portal status
  %(prog)s portal status --as-of 2025-06-01
  %(prog)s portal --backend sql status
  %(prog)s portal history Plumbing --since 2024-01-01
  %(prog)s portal log Plumbing --company "Acme Plumbing" --type "Drain cleaning" \\
      --pdf invoice.pdf
  %(prog)s portal add-category Roofing Gutters
  %(prog)s portal pdf Plumbing 0 -o invoice.pdf
""",
    )
    parser.add_argument(
        "home",
        type=Path,
        help="Path to portal home directory (categories/, uploads/, config/)",
    )
    parser.add_argument(
        "--backend",
        choices=["file", "sql"],
        default=settings.backend,
        help="Record store backend (default: $MAINT_BACKEND or file)",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=os.environ.get("MAINT_DATABASE_URL"),
        help="SQLAlchemy URL for the sql backend (default: HOME/database.sqlite)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=os.environ.get("MAINT_CONFIG"),
        help="Recommended intervals file (default: HOME/config/recommended.yaml)",
    )
    parser.add_argument(
        "--due-soon-days",
        type=int,
        default=settings.due_soon_days,
        help="Days before the interval ends that count as due soon (default: 30)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Rank categories by how overdue their maintenance is"
    )
    status_parser.add_argument(
        "--as-of",
        type=str,
        help="Rank as of this date (YYYY-MM-DD, default: now)",
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View service records")
    history_parser.add_argument("category", type=str, help="Category name")
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only records since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Oldest first instead of newest first",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new service record")
    log_parser.add_argument("category", type=str, help="Category name")
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--company",
        type=str,
        required=True,
        help="Company that performed the service",
    )
    log_parser.add_argument(
        "--type",
        type=str,
        required=True,
        help="Type of maintenance (e.g., 'Drain cleaning')",
    )
    log_parser.add_argument(
        "--notes",
        type=str,
        help="Notes about the service",
    )
    log_parser.add_argument(
        "--pdf",
        type=Path,
        help="PDF invoice or report to attach",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Categories subcommand
    subparsers.add_parser("categories", help="List categories and intervals")

    # Add category subcommand
    add_category_parser = subparsers.add_parser(
        "add-category", help="Create empty categories"
    )
    add_category_parser.add_argument(
        "names",
        nargs="*",
        help=f"Category names (default: {', '.join(DEFAULT_CATEGORIES)})",
    )

    # PDF subcommand
    pdf_parser = subparsers.add_parser("pdf", help="Export a record's attached PDF")
    pdf_parser.add_argument("category", type=str, help="Category name")
    pdf_parser.add_argument("record_id", type=int, help="Record ID (see history)")
    pdf_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: stored filename)",
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate home directory exists
    if not args.home.is_dir():
        print(f"Error: Directory not found: {args.home}")
        return 1

    store = open_store(args.backend, args.home, args.database_url)
    config = load_category_config(args.config or args.home / "config" / "recommended.yaml")

    return COMMANDS[args.command](args, store, config)


if __name__ == "__main__":
    sys.exit(main() or 0)
