"""Cancellation tokens and latest-wins request slots.

A page owns one RequestSlot per logical operation (fetch, submit). Starting
a new operation cancels the previous token, which also cancels the asyncio
task bound to it. Results are applied only while their token is still the
slot's latest one.
"""

import asyncio
import logging

logger = logging.getLogger("eventsync.cancellation")


class CancelToken:
    """Owned cancellation handle for one asynchronous operation."""

    __slots__ = ("label", "_cancelled", "_task")

    def __init__(self, label: str = "") -> None:
        self.label = label
        self._cancelled = False
        self._task: asyncio.Task | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def bind(self, task: asyncio.Task) -> None:
        self._task = task
        if self._cancelled:
            task.cancel()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.debug("Cancelled operation %s", self.label or "-")

    def __repr__(self) -> str:
        return f"CancelToken({self.label!r}, cancelled={self._cancelled})"


class RequestSlot:
    """Tracks the latest operation of one kind; earlier ones are withdrawn."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._current: CancelToken | None = None
        self._seq = 0

    def begin(self) -> CancelToken:
        if self._current is not None:
            self._current.cancel()
        self._seq += 1
        self._current = CancelToken(f"{self.name}#{self._seq}")
        return self._current

    def is_latest(self, token: CancelToken) -> bool:
        return token is self._current and not token.cancelled

    @property
    def active(self) -> bool:
        return self._current is not None and not self._current.cancelled

    def cancel(self) -> None:
        if self._current is not None:
            self._current.cancel()


async def run_latest(slot: RequestSlot, operation) -> bool:
    """Run ``operation(token)`` as the slot's latest task.

    Returns False when the operation was withdrawn (superseded or cancelled
    through its token) instead of completing. Cancellation of the caller
    itself still propagates.
    """
    token = slot.begin()
    task = asyncio.ensure_future(operation(token))
    token.bind(task)
    try:
        await task
    except asyncio.CancelledError:
        if token.cancelled:
            logger.debug("Operation %s withdrawn", token.label)
            return False
        raise
    return True
