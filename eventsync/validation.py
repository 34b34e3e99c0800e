"""Structural validation of untrusted server payloads.

Every inbound payload passes through one of these functions before any
other part of the engine looks at it. They never raise: a payload of the
wrong shape yields ``None``.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from eventsync.models.events import EventDetail
from eventsync.models.results import CandidateResult, ResultsSnapshot

logger = logging.getLogger("eventsync.validation")

M = TypeVar("M", bound=BaseModel)


def _validate(model: type[M], raw: Any) -> M | None:
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.debug("Rejected %s payload: %d error(s)", model.__name__, e.error_count())
        return None


def validate(raw: Any) -> EventDetail | None:
    """Validate a ``GET /api/events/{publicId}`` payload."""
    return _validate(EventDetail, raw)


def validate_results(raw: Any) -> ResultsSnapshot | None:
    """Validate a ``GET /api/events/{publicId}/results`` payload."""
    return _validate(ResultsSnapshot, raw)


def validate_candidate_result(raw: Any) -> CandidateResult | None:
    return _validate(CandidateResult, raw)


def extract_edit_url(raw: Any) -> str:
    """Pull the capability link out of a submission response.

    Returns "" when the field is missing or not a string.
    """
    if isinstance(raw, dict):
        value = raw.get("editUrl")
        if isinstance(value, str):
            return value
    return ""
