"""Vehicle class for client vehicles tracked by the workshop."""

import uuid
from datetime import date
from typing import Optional, Union

from .compliance import ComplianceStatus
from .evaluator import evaluate


class Vehicle:
    """A client vehicle and the data needed to track its ITV."""

    def __init__(
        self,
        plate: str,
        make: str,
        model: str,
        year: Optional[int],
        last_itv_date: Optional[Union[str, date]] = None,
        id: Optional[str] = None,
        client_id: Optional[str] = None,
        current_mileage: Optional[float] = None,
        is_archived: bool = False,
    ):
        self.id = id or str(uuid.uuid4())
        self.client_id = client_id
        self.plate = plate
        self.make = make
        self.model = model
        self.year = year
        self.last_itv_date = last_itv_date or None
        self.current_mileage = current_mileage
        self.is_archived = is_archived or False

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        parts = [str(self.year) if self.year else None, self.make, self.model]
        return " ".join(p for p in parts if p)

    def itv_status(self, today: Optional[date] = None) -> ComplianceStatus:
        """Evaluate ITV compliance as of today (defaults to the wall clock)."""
        return evaluate(self, today or date.today())
