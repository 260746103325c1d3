#!/usr/bin/env python3
"""
Unified CLI for workshop ITV tracking.

Commands:
  status       - Show the ITV state of every vehicle
  alerts       - Run the ITV alert scan (toasts + push notifications)
  log-itv      - Record a passed inspection for a vehicle
  add-vehicle  - Add a client vehicle
  thresholds   - Show or edit the preventive alert thresholds
"""

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional, Tuple

import yaml

from itv import (
    AlertScanner,
    ComplianceState,
    ComplianceStatus,
    PushTransport,
    Vehicle,
    add_vehicle,
    load_settings,
    load_vehicles,
    save_last_itv_date,
    save_settings,
    scan_and_notify,
    sort_by_urgency,
    summarize,
)

logger = logging.getLogger("workshop")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_date(value: Optional[date]) -> str:
    """Format a date for display."""
    return value.isoformat() if value is not None else "-"


def format_days_remaining(status: ComplianceStatus) -> str:
    """Format remaining time for display (e.g., '45d' or '-12d')."""
    if status.days_remaining is None:
        return "-"
    return f"{status.days_remaining}d"


def format_state(state: ComplianceState) -> str:
    """Format a state name for section headers (NO_DATA -> NO DATA)."""
    return state.name.replace("_", " ")


def parse_date(value: Optional[str]) -> date:
    """Parse a YYYY-MM-DD argument, defaulting to today."""
    if not value:
        return date.today()
    return date.fromisoformat(value)


def find_vehicle(vehicles: List[Vehicle], plate: str) -> Optional[Vehicle]:
    """Find a vehicle by plate, ignoring case and spaces."""
    wanted = plate.replace(" ", "").upper()
    for vehicle in vehicles:
        if vehicle.plate.replace(" ", "").upper() == wanted:
            return vehicle
    return None


# =============================================================================
# Status command
# =============================================================================


def make_status_table(
    rows: List[Tuple[Vehicle, ComplianceStatus]]
) -> List[List[str]]:
    """Convert (vehicle, status) pairs to table rows."""
    table = []
    for vehicle, status in rows:
        table.append(
            [
                vehicle.plate,
                vehicle.name,
                vehicle.last_itv_date or "-",
                status.label,
                format_date(status.next_due_date),
                format_days_remaining(status),
            ]
        )
    return table


def cmd_status(args):
    """Show the ITV state of every vehicle."""
    today = parse_date(args.date)
    vehicles = load_vehicles(args.workshop_file)
    if not args.all:
        vehicles = [v for v in vehicles if not v.is_archived]

    rows = sort_by_urgency((v, v.itv_status(today)) for v in vehicles)
    counts = summarize(status for _, status in rows)

    print(f"ITV status as of {today.isoformat()}")
    print(f"Vehicles: {len(vehicles)}" + (" (including archived)" if args.all else ""))
    print(
        "  ".join(
            f"{format_state(state)}: {count}" for state, count in counts.items()
        )
    )
    print()

    if not rows:
        print("No vehicles found.")
        return 0

    headers = ["Plate", "Vehicle", "Last ITV", "Status", "Next due", "Remaining"]
    print(tabulate(make_status_table(rows), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Alerts command
# =============================================================================


def print_toast(message: str, severity: str) -> None:
    """Console stand-in for the in-app toast."""
    prefix = "!!" if severity == "critical" else "--"
    print(f"{prefix} {message}")


def cmd_alerts(args):
    """Run the ITV alert scan."""
    today = parse_date(args.date)
    push = None if args.dry_run else PushTransport(args.push_url)

    print(f"Scanning ITV alerts for {today.isoformat()}")
    events = scan_and_notify(args.workshop_file, today, print_toast, push)

    if not events:
        print("No alerts.")
    else:
        print()
        print(f"{len(events)} alert(s)")
    if args.dry_run:
        print("(dry run - no push notifications sent)")

    return 0


# =============================================================================
# Log ITV command
# =============================================================================


def cmd_log_itv(args):
    """Record a passed inspection for a vehicle."""
    vehicles = load_vehicles(args.workshop_file)
    vehicle = find_vehicle(vehicles, args.plate)

    if vehicle is None:
        print(f"Error: Unknown plate '{args.plate}'")
        print("\nKnown vehicles:")
        for v in sorted(vehicles, key=lambda v: v.plate):
            print(f"  {v.plate}  {v.name}")
        return 1

    itv_date = parse_date(args.date)

    print(f"Recording inspection in {args.workshop_file}:")
    print(f"  Vehicle:  {vehicle.plate} ({vehicle.name})")
    print(f"  Previous: {vehicle.last_itv_date or '-'}")
    print(f"  Date:     {itv_date.isoformat()}")

    vehicle.last_itv_date = itv_date
    status = vehicle.itv_status()
    print(f"  Status:   {status.label}")
    if status.next_due_date:
        print(f"  Next due: {status.next_due_date.isoformat()}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_last_itv_date(args.workshop_file, vehicle.id, itv_date)
    print("Inspection saved.")

    return 0


# =============================================================================
# Add vehicle command
# =============================================================================


def cmd_add_vehicle(args):
    """Add a client vehicle."""
    vehicles = load_vehicles(args.workshop_file)
    if find_vehicle(vehicles, args.plate) is not None:
        print(f"Error: A vehicle with plate '{args.plate}' already exists")
        return 1

    last_itv = parse_date(args.last_itv).isoformat() if args.last_itv else None
    vehicle = Vehicle(
        plate=args.plate.upper(),
        make=args.make,
        model=args.model,
        year=args.year,
        last_itv_date=last_itv,
        client_id=args.client,
        current_mileage=args.mileage,
    )

    status = vehicle.itv_status()
    print(f"Adding vehicle to {args.workshop_file}:")
    print(f"  Plate:    {vehicle.plate}")
    print(f"  Vehicle:  {vehicle.name}")
    print(f"  Last ITV: {vehicle.last_itv_date or '-'}")
    print(f"  Status:   {status.label}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    add_vehicle(args.workshop_file, vehicle)
    print("Vehicle saved.")

    return 0


# =============================================================================
# Thresholds command
# =============================================================================


def cmd_thresholds(args):
    """Show or edit the preventive alert thresholds."""
    settings = load_settings(args.workshop_file)

    changed = False
    if args.add is not None:
        settings.add_threshold(args.add)
        changed = True
    if args.remove is not None:
        settings.remove_threshold(args.remove)
        changed = True

    if changed:
        save_settings(args.workshop_file, settings)

    if settings.alert_thresholds:
        days = ", ".join(str(d) for d in settings.alert_thresholds)
        print(f"Alert thresholds (days before due): {days}")
    else:
        defaults = sorted(AlertScanner().default_thresholds, reverse=True)
        print(
            "Alert thresholds: none configured (defaults apply: "
            + ", ".join(str(d) for d in defaults)
            + ")"
        )

    return 0


# =============================================================================
# Main
# =============================================================================


def main():
    parser = argparse.ArgumentParser(
        description="Workshop ITV tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s workshop.yaml status
  %(prog)s workshop.yaml status --all --date 2025-01-01
  %(prog)s workshop.yaml alerts --dry-run
  %(prog)s workshop.yaml log-itv 1234ABC --date 2025-03-10
  %(prog)s workshop.yaml add-vehicle 1234ABC --make Seat --model Ibiza \\
      --year 2015 --last-itv 2023-01-10
  %(prog)s workshop.yaml thresholds --add 30
""",
    )
    parser.add_argument(
        "workshop_file",
        type=Path,
        help="Path to workshop YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show the ITV state of every vehicle"
    )
    status_parser.add_argument(
        "--all",
        action="store_true",
        help="Include archived vehicles",
    )
    status_parser.add_argument(
        "--date",
        type=str,
        help="Evaluate as of this date in YYYY-MM-DD format (default: today)",
    )

    # Alerts subcommand
    alerts_parser = subparsers.add_parser(
        "alerts", help="Run the ITV alert scan"
    )
    alerts_parser.add_argument(
        "--date",
        type=str,
        help="Scan as of this date in YYYY-MM-DD format (default: today)",
    )
    alerts_parser.add_argument(
        "--push-url",
        type=str,
        default=os.environ.get("PUSH_WEBHOOK_URL"),
        help="Push notification webhook (default: $PUSH_WEBHOOK_URL)",
    )
    alerts_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print alerts without sending push notifications",
    )

    # Log ITV subcommand
    log_parser = subparsers.add_parser(
        "log-itv", help="Record a passed inspection for a vehicle"
    )
    log_parser.add_argument(
        "plate",
        type=str,
        help="Vehicle plate (e.g., '1234ABC')",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Inspection date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be recorded without saving",
    )

    # Add vehicle subcommand
    add_parser = subparsers.add_parser("add-vehicle", help="Add a client vehicle")
    add_parser.add_argument("plate", type=str, help="Vehicle plate")
    add_parser.add_argument("--make", type=str, required=True, help="Make")
    add_parser.add_argument("--model", type=str, required=True, help="Model")
    add_parser.add_argument(
        "--year", type=int, required=True, help="Manufacture year"
    )
    add_parser.add_argument(
        "--last-itv",
        type=str,
        help="Date of the last passed inspection (YYYY-MM-DD)",
    )
    add_parser.add_argument("--client", type=str, help="Client id")
    add_parser.add_argument("--mileage", type=float, help="Current mileage")
    add_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Thresholds subcommand
    thresholds_parser = subparsers.add_parser(
        "thresholds", help="Show or edit the preventive alert thresholds"
    )
    thresholds_parser.add_argument(
        "--add", type=int, help="Add a threshold (days before due)"
    )
    thresholds_parser.add_argument(
        "--remove", type=int, help="Remove a threshold (days before due)"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate workshop file exists
    if not args.workshop_file.exists():
        print(f"Error: File not found: {args.workshop_file}")
        return 1

    handlers = {
        "status": cmd_status,
        "alerts": cmd_alerts,
        "log-itv": cmd_log_itv,
        "add-vehicle": cmd_add_vehicle,
        "thresholds": cmd_thresholds,
    }

    try:
        return handlers[args.command](args)
    except (ValueError, KeyError, yaml.YAMLError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
