"""Organizer page listing raw responses behind an admin key."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from eventsync.cancellation import CancelToken, run_latest
from eventsync.client import EventsClient
from eventsync.config import get_settings
from eventsync.controllers.base import MISSING_PUBLIC_ID, Page
from eventsync.errors import ErrorInfo, InputError
from eventsync.linkify import Fragment, linkify
from eventsync.tabular import TabularProjection, format_json, format_value, project
from eventsync.timers import MessageTimer

logger = logging.getLogger("eventsync.controllers.admin")

Clipboard = Callable[[str], Awaitable[None]]


class AdminResponsesPage(Page):
    def __init__(
        self,
        client: EventsClient,
        public_id: str | None = None,
        copy_ttl: float | None = None,
    ) -> None:
        super().__init__(client, public_id)
        self.admin_key = ""
        self.admin_key_error: str | None = None
        self.is_loading = False
        self.error: ErrorInfo | None = None
        self.response_data: Any = None
        if copy_ttl is None:
            copy_ttl = get_settings().client.copy_message_ttl_sec
        self._copy = MessageTimer(copy_ttl)
        self._fetch_slot = self._slot("fetch")

    def set_admin_key(self, key: str) -> None:
        self.admin_key = key
        self.admin_key_error = None

    @property
    def error_message(self) -> str | None:
        return self.error.describe() if self.error else None

    @property
    def copy_message(self) -> str | None:
        return self._copy.message

    @property
    def has_data(self) -> bool:
        return self.response_data is not None

    @property
    def json_text(self) -> str:
        return format_json(self.response_data)

    @property
    def table(self) -> TabularProjection | None:
        return project(self.response_data)

    def json_fragments(self) -> list[Fragment]:
        return linkify(self.json_text)

    def table_fragments(self) -> list[list[list[Fragment]]]:
        """Linkified cells, row by row, aligned with ``table.columns``."""
        table = self.table
        if table is None:
            return []
        return [
            [linkify(format_value(table.cell_value(row, column))) for column in table.columns]
            for row in table.rows
        ]

    async def fetch(self) -> bool:
        if self.closed:
            return False
        if not self.public_id:
            self.error = InputError(MISSING_PUBLIC_ID).to_info()
            return False
        key = self.admin_key.strip()
        if not key:
            self.admin_key_error = "Please enter the admin key."
            return False
        self.admin_key_error = None
        self.error = None
        self.response_data = None
        return await run_latest(self._fetch_slot, lambda token: self._fetch(token, self.public_id, key))

    async def _fetch(self, token: CancelToken, public_id: str, key: str) -> None:
        self.is_loading = True
        try:
            raw = await self.client.get_admin_responses(public_id, key)
        except Exception as e:
            if self._fetch_slot.is_latest(token):
                self.error = self._failure(e, "admin responses")
            return
        else:
            if self._fetch_slot.is_latest(token):
                self.response_data = raw
        finally:
            if not token.cancelled:
                self.is_loading = False

    async def copy_json(self, clipboard: Clipboard) -> None:
        text = self.json_text
        if not text:
            return
        try:
            await clipboard(text)
        except Exception as e:
            logger.warning("Clipboard write failed: %s", e)
            self._copy.set("Copy failed.")
            return
        self._copy.set("JSON copied.")

    def close(self) -> None:
        super().close()
        self._copy.cancel()
