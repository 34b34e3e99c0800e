import logging

from eventsync.aggregation import CandidateRow, summarize
from eventsync.cancellation import CancelToken, run_latest
from eventsync.client import EventsClient
from eventsync.controllers.base import MISSING_PUBLIC_ID, FetchStatus, Page
from eventsync.errors import ErrorInfo, InvalidPayloadError
from eventsync.models.results import ResultsSnapshot
from eventsync.validation import validate_results

logger = logging.getLogger("eventsync.controllers.results")


class ResultsPage(Page):
    def __init__(self, client: EventsClient, public_id: str | None = None) -> None:
        super().__init__(client, public_id)
        self.status = FetchStatus.IDLE
        self.snapshot: ResultsSnapshot | None = None
        self.rows: list[CandidateRow] = []
        self.error: ErrorInfo | None = None
        self.input_error: str | None = None
        self._fetch_slot = self._slot("fetch")

    async def load(self, public_id: str | None = None) -> bool:
        if self.closed:
            return False
        if public_id is not None:
            self.public_id = public_id
        if not self.public_id:
            self.input_error = MISSING_PUBLIC_ID
            return False
        self.input_error = None
        target = self.public_id
        return await run_latest(self._fetch_slot, lambda token: self._fetch(token, target))

    async def _fetch(self, token: CancelToken, public_id: str) -> None:
        self.status = FetchStatus.FETCHING
        self.error = None
        self.snapshot = None
        self.rows = []
        try:
            raw = await self.client.get_results(public_id)
        except Exception as e:
            if self._fetch_slot.is_latest(token):
                self.error = self._failure(e, "results")
                self.status = FetchStatus.FETCH_FAILED
            return
        if not self._fetch_slot.is_latest(token):
            return
        snapshot = validate_results(raw)
        if snapshot is None:
            self.error = self._failure(InvalidPayloadError(), "results")
            self.status = FetchStatus.FETCH_FAILED
            return
        self.snapshot = snapshot
        self.rows = summarize(snapshot)
        self.status = FetchStatus.READY
