"""Respondent page: fetch an event, edit answers, submit, reveal the edit link."""

import logging
from enum import Enum

from eventsync.cancellation import CancelToken, run_latest
from eventsync.client import EventsClient
from eventsync.controllers.base import MISSING_PUBLIC_ID, FetchStatus, Page
from eventsync.errors import ErrorInfo, InvalidPayloadError
from eventsync.models.events import Availability, EventDetail
from eventsync.models.responses import SubmitOutcome, SubmitRequest
from eventsync.state import AvailabilityState, build_items, initialize, set_availability
from eventsync.validation import extract_edit_url, validate

logger = logging.getLogger("eventsync.controllers.respond")


class SubmitStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    SUBMIT_FAILED = "submit_failed"


class RespondPage(Page):
    def __init__(self, client: EventsClient, public_id: str | None = None) -> None:
        super().__init__(client, public_id)
        self.fetch_status = FetchStatus.IDLE
        self.submit_status = SubmitStatus.IDLE
        self.event: EventDetail | None = None
        self.availability = AvailabilityState()
        self.respondent_name = ""
        self.fetch_error: ErrorInfo | None = None
        self.input_error: str | None = None
        self.outcome: SubmitOutcome | None = None
        self._fetch_slot = self._slot("fetch")
        self._submit_slot = self._slot("submit")

    @property
    def edit_url(self) -> str | None:
        """Capability link of the last successful submission ("" if none was returned)."""
        if self.outcome is None:
            return None
        return self.outcome.edit_url

    # ------------------------------------------------------------------
    # fetch
    # ------------------------------------------------------------------

    async def load(self, public_id: str | None = None) -> bool:
        """Fetch the event, superseding any fetch still in flight.

        Returns False when the fetch was not started or was withdrawn.
        """
        if self.closed:
            return False
        if public_id is not None and public_id != self.public_id:
            self._submit_slot.cancel()
            self.submit_status = SubmitStatus.IDLE
            self.outcome = None
            self.public_id = public_id
        if not self.public_id:
            self.input_error = MISSING_PUBLIC_ID
            return False
        target = self.public_id
        return await run_latest(self._fetch_slot, lambda token: self._fetch(token, target))

    async def _fetch(self, token: CancelToken, public_id: str) -> None:
        self.fetch_status = FetchStatus.FETCHING
        self.fetch_error = None
        self.event = None
        self.availability = AvailabilityState()
        logger.info("Fetching event %s", public_id)
        try:
            raw = await self.client.get_event(public_id)
        except Exception as e:
            if self._fetch_slot.is_latest(token):
                self.fetch_error = self._failure(e, "fetch")
                self.fetch_status = FetchStatus.FETCH_FAILED
            return
        if not self._fetch_slot.is_latest(token):
            logger.debug("Discarding stale event payload for %s", public_id)
            return
        event = validate(raw)
        if event is None:
            self.fetch_error = self._failure(InvalidPayloadError(), "fetch")
            self.fetch_status = FetchStatus.FETCH_FAILED
            return
        self.event = event
        self.availability = initialize(event.candidates)
        self.fetch_status = FetchStatus.READY
        logger.info("Loaded event %s with %d candidates", public_id, len(event.candidates))

    # ------------------------------------------------------------------
    # edits
    # ------------------------------------------------------------------

    def set_respondent_name(self, name: str) -> None:
        self.respondent_name = name
        if self.input_error and name.strip():
            self.input_error = None

    def set_availability(self, slot_id: int, value: Availability | str) -> None:
        self.availability = set_availability(self.availability, slot_id, value)

    # ------------------------------------------------------------------
    # submit
    # ------------------------------------------------------------------

    async def submit(self) -> SubmitOutcome | None:
        """Send the current answers.

        Returns the new outcome, or None when nothing was sent or the
        submission was withdrawn.
        """
        if self.closed:
            return None
        name = self.respondent_name.strip()
        if not name:
            self.input_error = "Please enter your name."
            return None
        if self.event is None or not self.public_id:
            self.input_error = "The event has not been loaded yet."
            return None
        self.input_error = None
        body = SubmitRequest(
            respondent_name=name,
            items=build_items(self.event.candidates, self.availability),
        )
        target = self.public_id
        done = await run_latest(self._submit_slot, lambda token: self._submit(token, target, body))
        return self.outcome if done else None

    async def _submit(self, token: CancelToken, public_id: str, body: SubmitRequest) -> None:
        self.submit_status = SubmitStatus.SUBMITTING
        self.outcome = None
        try:
            raw = await self.client.submit_response(public_id, body)
        except Exception as e:
            if self._submit_slot.is_latest(token):
                self.outcome = SubmitOutcome(error=self._failure(e, "submit"))
                self.submit_status = SubmitStatus.SUBMIT_FAILED
            return
        if not self._submit_slot.is_latest(token):
            return
        self.outcome = SubmitOutcome(edit_url=extract_edit_url(raw))
        self.submit_status = SubmitStatus.SUBMITTED
        logger.info("Submitted response for event %s (link=%s)", public_id, bool(self.outcome.edit_url))
