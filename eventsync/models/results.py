from pydantic import StrictInt, StrictStr

from eventsync.models.events import Count, WireModel


class CandidateResult(WireModel):
    """Server-computed tallies for one candidate slot."""

    candidate_slot_id: StrictInt
    start_at: StrictStr
    end_at: StrictStr
    ok: Count
    maybe: Count
    ng: Count


class ResultsSnapshot(WireModel):
    public_id: StrictStr
    title: StrictStr
    description: StrictStr
    respondent_count: Count
    candidates: tuple[CandidateResult, ...]
