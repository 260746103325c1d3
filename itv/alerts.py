"""ITV alert scanning over the workshop's vehicles."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Set, Union

from .calculations import to_date, days_until
from .evaluator import evaluate
from .loader import load_workshop
from .notify import dispatch
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Alert severity, also used as the toast/flash category."""

    CRITICAL = "critical"
    INFO = "info"


@dataclass(frozen=True)
class AlertEvent:
    """An alert raised for one vehicle during one scan."""

    vehicle_id: str
    plate: str
    severity: Severity
    message: str
    title: str
    body: str
    days_remaining: int


def format_time_label(days: int) -> str:
    """Weeks when days is a whole number of weeks (7 or more), else days."""
    if days >= 7 and days % 7 == 0:
        weeks = days // 7
        return f"{weeks} {'semana' if weeks == 1 else 'semanas'}"
    return f"{days} {'día' if days == 1 else 'días'}"


class AlertScanner:
    """
    Emits ITV alerts for a set of vehicles.

    - Expired inspection: one CRITICAL alert, nothing else for that vehicle
    - Days remaining exactly equal to a threshold: one INFO alert

    Thresholds only fire on the exact day, so repeated scans on later days
    do not alert again. Scanning twice on the same day alerts twice.
    """

    def __init__(self, default_thresholds: Sequence[int] = (1, 3, 7, 14)):
        self.default_thresholds = tuple(default_thresholds)

    def thresholds_for(self, thresholds: Optional[Iterable[int]]) -> Set[int]:
        """Configured thresholds, or the default set when absent or empty."""
        configured = set(thresholds or [])
        return configured or set(self.default_thresholds)

    def check_vehicle(
        self, vehicle: Vehicle, thresholds: Set[int], today: date
    ) -> Optional[AlertEvent]:
        """Alert for a single vehicle, or None."""
        status = evaluate(vehicle, today)
        if not status.has_due_date:
            return None

        remaining = days_until(to_date(status.next_due_date), to_date(today))

        if remaining < 0:
            return AlertEvent(
                vehicle_id=vehicle.id,
                plate=vehicle.plate,
                severity=Severity.CRITICAL,
                message=f"URGENT! Inspection for {vehicle.plate} is EXPIRED.",
                title="INSPECTION EXPIRED!",
                body=f"Vehicle {vehicle.plate} ({vehicle.make}) has an expired inspection.",
                days_remaining=remaining,
            )

        if remaining in thresholds:
            label = format_time_label(remaining)
            return AlertEvent(
                vehicle_id=vehicle.id,
                plate=vehicle.plate,
                severity=Severity.INFO,
                message=f"Reminder: Inspection for {vehicle.plate} expires in {label}.",
                title="Preventive inspection notice",
                body=f"The inspection for {vehicle.plate} expires in {label}.",
                days_remaining=remaining,
            )

        return None

    def scan(
        self,
        vehicles: Iterable[Vehicle],
        thresholds: Optional[Iterable[int]],
        today: date,
    ) -> List[AlertEvent]:
        """Check every vehicle once and collect the alerts."""
        active = self.thresholds_for(thresholds)
        events = []
        for vehicle in vehicles:
            event = self.check_vehicle(vehicle, active, today)
            if event is not None:
                events.append(event)
        logger.info("ITV scan on %s: %d alert(s)", today, len(events))
        return events


def scan_and_notify(
    filename: Union[str, Path],
    today: date,
    show_toast: Callable[[str, str], None],
    push,
    scanner: Optional[AlertScanner] = None,
) -> List[AlertEvent]:
    """
    Load vehicles and settings, scan them and hand alerts to the notifiers.

    Errors reading the workshop file propagate to the caller.
    """
    workshop = load_workshop(filename)
    scanner = scanner or AlertScanner()
    events = scanner.scan(
        workshop["vehicles"], workshop["settings"].alert_thresholds, today
    )
    dispatch(events, show_toast, push)
    return events
