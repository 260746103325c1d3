"""WorkshopSettings class for workshop details and alert configuration."""

from typing import Iterable, List, Optional


class WorkshopSettings:
    """Workshop identification and the ITV alert thresholds (days before due)."""

    def __init__(
        self,
        name: str = "",
        address: str = "",
        phone: str = "",
        email: str = "",
        website: str = "",
        alert_thresholds: Optional[Iterable[int]] = None,
    ):
        self.name = name or ""
        self.address = address or ""
        self.phone = phone or ""
        self.email = email or ""
        self.website = website or ""
        self.alert_thresholds: List[int] = []
        for days in alert_thresholds or []:
            self.add_threshold(days)

    def add_threshold(self, days: int) -> None:
        """Add a threshold; duplicates are ignored, negatives rejected."""
        days = int(days)
        if days < 0:
            raise ValueError(f"Alert threshold must be 0 or more days, got {days}")
        if days not in self.alert_thresholds:
            self.alert_thresholds.append(days)
            self.alert_thresholds.sort(reverse=True)

    def remove_threshold(self, days: int) -> None:
        """Remove a threshold if present."""
        days = int(days)
        if days in self.alert_thresholds:
            self.alert_thresholds.remove(days)
