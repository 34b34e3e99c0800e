"""In-memory availability answers for one respondent.

States are immutable snapshots: every update returns a new object and the
previous one keeps its values, so a render holding an older snapshot
always sees a consistent set of answers.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from eventsync.models.events import DEFAULT_AVAILABILITY, Availability, CandidateSlot
from eventsync.models.responses import ResponseItem

logger = logging.getLogger("eventsync.state")


class AvailabilityState(Mapping[int, Availability]):
    """Read-only mapping of candidateSlotId -> Availability."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[int, Availability] | None = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    def __getitem__(self, slot_id: int) -> Availability:
        return self._values[slot_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}: {v.value}" for k, v in self._values.items())
        return f"AvailabilityState({{{inner}}})"

    def with_availability(self, slot_id: int, value: Availability) -> "AvailabilityState":
        return set_availability(self, slot_id, value)


def initialize(slots: Iterable[CandidateSlot]) -> AvailabilityState:
    """Build a fresh state with every slot set to MAYBE."""
    return AvailabilityState({s.candidate_slot_id: DEFAULT_AVAILABILITY for s in slots})


def set_availability(
    state: AvailabilityState, slot_id: int, value: Availability | str
) -> AvailabilityState:
    """Return a copy of ``state`` with one slot changed.

    Unknown slot ids are accepted and leave the answers as they were, so the
    key set always matches the slots of the current event.
    """
    value = Availability(value)
    if slot_id not in state:
        logger.debug("Ignoring availability for unknown slot %s", slot_id)
        return AvailabilityState(state)
    updated = dict(state)
    updated[slot_id] = value
    return AvailabilityState(updated)


def build_items(
    slots: Iterable[CandidateSlot], state: Mapping[int, Availability]
) -> tuple[ResponseItem, ...]:
    """Pair every candidate slot with its current answer, in slot order."""
    return tuple(
        ResponseItem(
            candidate_slot_id=s.candidate_slot_id,
            availability=state.get(s.candidate_slot_id, DEFAULT_AVAILABILITY),
        )
        for s in slots
    )
