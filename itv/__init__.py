"""
Vehicle ITV (periodic roadworthiness inspection) tracking for a repair shop.

This package provides:
- ComplianceState: Urgency levels (EXPIRED, WARNING, VALID, etc.)
- Vehicle: Client vehicle with manufacture year and last inspection
- ComplianceStatus: Calculated inspection status and next due date
- WorkshopSettings: Workshop details and alert thresholds
- AlertScanner: Threshold-based ITV alerts over a set of vehicles
- PushTransport: Best-effort push notification delivery
"""

from .status import ComplianceState
from .compliance import ComplianceStatus
from .calculations import (
    calc_first_due_date,
    calc_interval_years,
    calc_due_date,
    days_until,
    classify,
)
from .evaluator import evaluate, summarize, sort_by_urgency
from .vehicle import Vehicle
from .settings import WorkshopSettings
from .loader import (
    load_workshop,
    load_vehicles,
    load_settings,
    create_workshop,
    save_settings,
    add_vehicle,
    update_vehicle,
    delete_vehicle,
    save_last_itv_date,
)
from .notify import PushTransport, dispatch
from .alerts import (
    Severity,
    AlertEvent,
    AlertScanner,
    format_time_label,
    scan_and_notify,
)

__all__ = [
    "ComplianceState",
    "ComplianceStatus",
    "calc_first_due_date",
    "calc_interval_years",
    "calc_due_date",
    "days_until",
    "classify",
    "evaluate",
    "summarize",
    "sort_by_urgency",
    "Vehicle",
    "WorkshopSettings",
    "load_workshop",
    "load_vehicles",
    "load_settings",
    "create_workshop",
    "save_settings",
    "add_vehicle",
    "update_vehicle",
    "delete_vehicle",
    "save_last_itv_date",
    "PushTransport",
    "dispatch",
    "Severity",
    "AlertEvent",
    "AlertScanner",
    "format_time_label",
    "scan_and_notify",
]
