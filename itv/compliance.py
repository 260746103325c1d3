"""ComplianceStatus dataclass for calculated ITV status."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .status import ComplianceState


@dataclass(frozen=True)
class ComplianceStatus:
    """Calculated ITV compliance for a vehicle on a given day."""

    state: ComplianceState
    label: str
    next_due_date: Optional[date] = None
    days_remaining: Optional[int] = None

    @property
    def has_due_date(self) -> bool:
        return self.next_due_date is not None

    @property
    def needs_attention(self) -> bool:
        return self.state in (ComplianceState.EXPIRED, ComplianceState.WARNING)
