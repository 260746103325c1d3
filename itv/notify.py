"""Toast and push delivery for ITV alerts."""

import logging
from typing import Callable, Iterable, Optional

import requests

logger = logging.getLogger(__name__)


class PushTransport:
    """
    Best-effort push notifications through an HTTP webhook.

    POSTs {"title", "body"} as JSON. Delivery failures are logged and
    dropped, never retried or raised to the caller.
    """

    def __init__(self, url: Optional[str] = None, timeout: float = 5):
        self.url = url or None
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return self.url is not None

    def send(self, title: str, body: str) -> None:
        """Fire-and-forget delivery of one notification."""
        if not self.enabled:
            logger.debug("Push disabled, skipping: %s", title)
            return
        try:
            response = requests.post(
                self.url, json={"title": title, "body": body}, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Push notification '%s' not delivered: %s", title, e)


def dispatch(
    events: Iterable,
    show_toast: Callable[[str, str], None],
    push: Optional[PushTransport],
) -> None:
    """Show each alert as a toast, then push it."""
    for event in events:
        show_toast(event.message, event.severity.value)
        if push is not None:
            push.send(event.title, event.body)
