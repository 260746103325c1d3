"""Helper functions for ITV due date calculations."""

import math
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from .status import ComplianceState

# Vehicles younger than this have no inspection due yet
FIRST_ITV_AGE = 4
# From this age on the inspection is yearly instead of every two years
YEARLY_ITV_AGE = 10


def to_date(value: Optional[Union[str, date, datetime]]) -> Optional[date]:
    """
    Normalize an ISO string, date or datetime to a date (midnight).

    Empty strings are treated as missing.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def calc_first_due_date(year: int) -> date:
    """First inspection is due on January 1st, four years after manufacture."""
    return date(year + FIRST_ITV_AGE, 1, 1)


def calc_interval_years(age: int) -> Optional[int]:
    """
    Inspection interval for a vehicle of the given age.

    - 4 to 9 years old: every 2 years
    - 10 years or older: every year
    - Younger than 4: None (not due yet)
    """
    if age >= YEARLY_ITV_AGE:
        return 1
    if age >= FIRST_ITV_AGE:
        return 2
    return None


def calc_due_date(last_date: date, interval_years: int) -> date:
    """Calculate next due date: last inspection + interval years."""
    return last_date + relativedelta(years=interval_years)


def days_until(due: date, today: date) -> int:
    """
    Whole days from today to due, rounded up.

    A due moment later today counts as 0, never -1.
    """
    return math.ceil((due - today) / timedelta(days=1))


def classify(days_remaining: int, warning_days: int = 15) -> ComplianceState:
    """EXPIRED when past due, WARNING within warning_days, else VALID."""
    if days_remaining < 0:
        return ComplianceState.EXPIRED
    if days_remaining <= warning_days:
        return ComplianceState.WARNING
    return ComplianceState.VALID
