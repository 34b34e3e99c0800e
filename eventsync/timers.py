"""Scoped timers for auto-dismissing user-visible messages."""

import asyncio
import logging

logger = logging.getLogger("eventsync.timers")


class MessageTimer:
    """Holds one transient message and clears it after ``ttl`` seconds.

    Setting a new message cancels the pending dismissal of the previous one;
    ``cancel()`` must be called on page teardown.
    """

    def __init__(self, ttl: float) -> None:
        self.ttl = ttl
        self.message: str | None = None
        self._handle: asyncio.TimerHandle | None = None

    def set(self, message: str) -> None:
        self._cancel_handle()
        self.message = message
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.ttl, self._dismiss)

    def _dismiss(self) -> None:
        self._handle = None
        self.message = None

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def cancel(self) -> None:
        self._cancel_handle()
        self.message = None
