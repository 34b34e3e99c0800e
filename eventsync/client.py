"""HTTP client for the event-scheduling API.

Blocking ``requests`` calls run in a worker thread so the event loop never
blocks; cancelling the awaiting task withdraws the request and its result
is discarded when the thread finishes.
"""

import asyncio
import logging
import time
from typing import Any
from urllib.parse import quote

import requests

from eventsync.config import get_settings
from eventsync.errors import StatusError, TransportError
from eventsync.models.responses import SubmitRequest

logger = logging.getLogger("eventsync.client")
http_logger = logging.getLogger("eventsync.http")


def encode_public_id(public_id: str) -> str:
    """Percent-encode a public identifier as one path segment."""
    return quote(public_id, safe="")


def error_message(response: requests.Response) -> str:
    """Best-effort human-readable message for a failed response."""
    message = response.reason or f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return message
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return message


class EventsClient:
    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.client.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.client.timeout_sec
        self._owns_session = session is None
        self.session = session or requests.Session()
        if self._owns_session:
            self.session.headers.update(
                {"User-Agent": settings.client.user_agent, "Accept": "application/json"}
            )
        if settings.debug.request:
            http_logger.setLevel(logging.DEBUG)

    def event_path(self, public_id: str, suffix: str = "") -> str:
        return f"/api/events/{encode_public_id(public_id)}{suffix}"

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        start = time.time()
        http_logger.debug("http.request start method=%s path=%s", method, path)
        try:
            response = self.session.request(
                method, self.base_url + path, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            dur_ms = int((time.time() - start) * 1000)
            http_logger.warning(
                "http.request error method=%s path=%s dur_ms=%s err=%r", method, path, dur_ms, e
            )
            raise TransportError(str(e) or e.__class__.__name__) from e
        dur_ms = int((time.time() - start) * 1000)
        http_logger.debug(
            "http.request end method=%s path=%s status=%s dur_ms=%s",
            method, path, response.status_code, dur_ms,
        )
        return response

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            TransportError: The request never produced a response.
            StatusError: The response status was not 2xx.
        """
        response = await asyncio.to_thread(self._send, method, path, **kwargs)
        if not 200 <= response.status_code < 300:
            raise StatusError(response.status_code, error_message(response))
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning("Non-JSON body from %s %s (status=%s)", method, path, response.status_code)
            return None

    async def get_event(self, public_id: str) -> Any:
        return await self.request("GET", self.event_path(public_id))

    async def get_results(self, public_id: str) -> Any:
        return await self.request("GET", self.event_path(public_id, "/results"))

    async def submit_response(self, public_id: str, body: SubmitRequest) -> Any:
        logger.info("POST responses event=%s items=%d", public_id, len(body.items))
        return await self.request(
            "POST", self.event_path(public_id, "/responses"), json=body.to_body()
        )

    async def get_admin_responses(self, public_id: str, admin_key: str) -> Any:
        return await self.request(
            "GET",
            self.event_path(public_id, "/admin/responses"),
            headers={"X-Admin-Key": admin_key},
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()
