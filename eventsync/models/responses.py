from pydantic import BaseModel, StrictInt, StrictStr

from eventsync.errors import ErrorInfo
from eventsync.models.events import Availability, OutboundModel


class ResponseItem(OutboundModel):
    candidate_slot_id: StrictInt
    availability: Availability


class SubmitRequest(OutboundModel):
    respondent_name: StrictStr
    items: tuple[ResponseItem, ...]

    def to_body(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class SubmitOutcome(BaseModel):
    """Result of one submission attempt.

    Exactly one of ``edit_url`` and ``error`` is set. An empty ``edit_url``
    means the server accepted the response but returned no link.
    """

    edit_url: str | None = None
    error: ErrorInfo | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.edit_url is not None

    @property
    def has_link(self) -> bool:
        return bool(self.edit_url)
