"""ITV compliance evaluation for a single vehicle."""

import logging
from datetime import date
from typing import Dict, Iterable, List, Tuple, TYPE_CHECKING

from .compliance import ComplianceStatus
from .status import ComplianceState
from .calculations import (
    to_date,
    calc_first_due_date,
    calc_interval_years,
    calc_due_date,
    days_until,
    classify,
)

if TYPE_CHECKING:
    from .vehicle import Vehicle

logger = logging.getLogger(__name__)

# Used for the age calculation when a vehicle has no manufacture year
DEFAULT_YEAR = 2000


def evaluate(vehicle: "Vehicle", today: date, warning_days: int = 15) -> ComplianceStatus:
    """
    Calculate the ITV compliance of a vehicle on a given day.

    Logic:
    - No inspection on record and still before January 1st of year + 4: EXEMPT
    - No inspection on record otherwise: NO_DATA
    - Interval from the vehicle's age today: 2 years from age 4, 1 year from
      age 10, EXEMPT when younger than 4
    - Next due = last inspection + interval, compared against today

    The interval follows the vehicle's current age, not its age at the last
    inspection. An inspection date that is not a real calendar date counts as missing.
    """
    today = to_date(today)
    try:
        last_date = to_date(vehicle.last_itv_date)
    except ValueError:
        logger.warning(
            "Ignoring invalid inspection date %r for %s",
            vehicle.last_itv_date,
            vehicle.plate,
        )
        last_date = None

    if last_date is None and vehicle.year:
        first_due = calc_first_due_date(vehicle.year)
        if today < first_due:
            return ComplianceStatus(
                state=ComplianceState.EXEMPT,
                label=f"Exempt until {first_due.year}",
            )

    if last_date is None:
        return ComplianceStatus(state=ComplianceState.NO_DATA, label="No data")

    age = today.year - (vehicle.year or DEFAULT_YEAR)
    interval = calc_interval_years(age)
    if interval is None:
        return ComplianceStatus(
            state=ComplianceState.EXEMPT, label="Exempt (new vehicle)"
        )

    next_due = calc_due_date(last_date, interval)
    remaining = days_until(next_due, today)
    state = classify(remaining, warning_days)

    if state == ComplianceState.EXPIRED:
        label = "EXPIRED"
    elif state == ComplianceState.WARNING:
        label = f"Expires in {remaining} days"
    else:
        label = "Valid"

    return ComplianceStatus(
        state=state,
        label=label,
        next_due_date=next_due,
        days_remaining=remaining,
    )


def summarize(statuses: Iterable[ComplianceStatus]) -> Dict[ComplianceState, int]:
    """Count statuses per state (every state present, zero if unused)."""
    counts = {state: 0 for state in ComplianceState}
    for status in statuses:
        counts[status.state] += 1
    return counts


def sort_by_urgency(
    rows: Iterable[Tuple["Vehicle", ComplianceStatus]]
) -> List[Tuple["Vehicle", ComplianceStatus]]:
    """Order (vehicle, status) pairs: most urgent state first, soonest due first."""

    def key(row):
        vehicle, status = row
        remaining = status.days_remaining
        return (
            status.state.value,
            remaining if remaining is not None else 0,
            vehicle.plate,
        )

    return sorted(rows, key=key)
