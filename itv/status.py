"""ComplianceState enum for ITV urgency levels."""

from enum import Enum


class ComplianceState(Enum):
    """ITV compliance categories. Lower value = more urgent."""

    EXPIRED = 1
    WARNING = 2
    VALID = 3
    EXEMPT = 4  # New vehicle, inspection not yet required
    NO_DATA = 5  # Can't calculate (no last inspection)
