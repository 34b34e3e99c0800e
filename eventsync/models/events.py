from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, model_validator
from pydantic.alias_generators import to_camel


class Availability(str, Enum):
    OK = "OK"
    MAYBE = "MAYBE"
    NG = "NG"


DEFAULT_AVAILABILITY = Availability.MAYBE


class WireModel(BaseModel):
    """Immutable model read from the camelCase wire format.

    Inbound payloads are validated by alias only.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
    )


class OutboundModel(WireModel):
    """Wire model built in code by field name and sent by alias."""

    model_config = ConfigDict(populate_by_name=True)


class CandidateSlot(WireModel):
    candidate_slot_id: StrictInt
    start_at: StrictStr
    end_at: StrictStr


class EventDetail(WireModel):
    title: StrictStr
    description: StrictStr
    candidates: tuple[CandidateSlot, ...]

    @model_validator(mode="after")
    def unique_slot_ids(self) -> "EventDetail":
        ids = [c.candidate_slot_id for c in self.candidates]
        if len(ids) != len(set(ids)):
            raise ValueError("candidateSlotId must be unique within an event")
        return self

    @property
    def slot_ids(self) -> tuple[int, ...]:
        return tuple(c.candidate_slot_id for c in self.candidates)


Count = Annotated[StrictInt, Field(ge=0)]
