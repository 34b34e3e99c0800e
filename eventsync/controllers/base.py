import logging
from enum import Enum

from eventsync.cancellation import RequestSlot
from eventsync.client import EventsClient
from eventsync.errors import ClientError, ErrorInfo, to_info

logger = logging.getLogger("eventsync.controllers")

MISSING_PUBLIC_ID = "Event ID is not specified."


class FetchStatus(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    FETCH_FAILED = "fetch_failed"


class Page:
    """State owned by one page instance.

    Every asynchronous operation runs through a RequestSlot so that only the
    latest one may touch page state; ``close()`` withdraws all of them.
    """

    def __init__(self, client: EventsClient, public_id: str | None = None) -> None:
        self.client = client
        self.public_id = public_id
        self.closed = False
        self._slots: list[RequestSlot] = []

    def _slot(self, name: str) -> RequestSlot:
        slot = RequestSlot(f"{type(self).__name__}.{name}")
        self._slots.append(slot)
        return slot

    def _failure(self, exc: Exception, operation: str) -> ErrorInfo:
        if isinstance(exc, ClientError):
            logger.warning(
                "%s failed for event %s: %s (status=%s)",
                operation, self.public_id, exc.detail, exc.status,
            )
        else:
            logger.exception("Unexpected error during %s for event %s", operation, self.public_id)
        return to_info(exc)

    def close(self) -> None:
        """Tear the page down, cancelling anything still in flight."""
        self.closed = True
        for slot in self._slots:
            slot.cancel()
