import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import asyncio

import pytest
import requests

from eventsync.config import clear_settings_cache


def make_response(status: int = 200, body=None, reason: str = "OK", raw: bytes | None = None):
    """Build a real requests.Response without touching the network."""
    import json

    response = requests.Response()
    response.status_code = status
    response.reason = reason
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode()
    else:
        response._content = b""
    response.headers["Content-Type"] = "application/json"
    return response


EVENT_PAYLOAD = {
    "title": "Team dinner",
    "description": "Pick a night",
    "candidates": [
        {"candidateSlotId": 1, "startAt": "2024-01-01T18:00:00Z", "endAt": "2024-01-01T20:00:00Z"},
        {"candidateSlotId": 2, "startAt": "2024-01-02T18:00:00Z", "endAt": "2024-01-02T20:00:00Z"},
    ],
}

RESULTS_PAYLOAD = {
    "publicId": "abc",
    "title": "Team dinner",
    "description": "Pick a night",
    "respondentCount": 4,
    "candidates": [
        {"candidateSlotId": 1, "startAt": "2024-01-01T18:00:00Z", "endAt": "2024-01-01T20:00:00Z",
         "ok": 2, "maybe": 1, "ng": 1},
        {"candidateSlotId": 2, "startAt": "2024-01-02T18:00:00Z", "endAt": "2024-01-02T20:00:00Z",
         "ok": 0, "maybe": 0, "ng": 0},
    ],
}


class FakeEventsClient:
    """Stands in for EventsClient; each call can be held open until released."""

    def __init__(self):
        self.payloads: dict[str, object] = {}
        self.errors: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple] = []
        self.closed = False

    def hold(self, key: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[key] = gate
        return gate

    async def _answer(self, key: str, *call):
        self.calls.append(call)
        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()
        if key in self.errors:
            raise self.errors[key]
        return self.payloads.get(key)

    async def get_event(self, public_id):
        return await self._answer(f"event:{public_id}", "get_event", public_id)

    async def get_results(self, public_id):
        return await self._answer(f"results:{public_id}", "get_results", public_id)

    async def submit_response(self, public_id, body):
        return await self._answer(f"submit:{public_id}", "submit_response", public_id, body)

    async def get_admin_responses(self, public_id, admin_key):
        return await self._answer(f"admin:{public_id}", "get_admin_responses", public_id, admin_key)

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def fake_client():
    return FakeEventsClient()
