"""Tests for auto-dismissing message timers."""

import asyncio

import pytest

from eventsync.timers import MessageTimer


class TestMessageTimer:
    @pytest.mark.asyncio
    async def test_message_is_dismissed(self):
        timer = MessageTimer(0.01)
        timer.set("Copied")
        assert timer.message == "Copied"
        assert timer.pending
        await asyncio.sleep(0.05)
        assert timer.message is None
        assert not timer.pending

    @pytest.mark.asyncio
    async def test_replacement_restarts_timer(self):
        timer = MessageTimer(0.2)
        timer.set("first")
        await asyncio.sleep(0.1)
        timer.set("second")
        await asyncio.sleep(0.15)
        assert timer.message == "second"
        await asyncio.sleep(0.2)
        assert timer.message is None

    @pytest.mark.asyncio
    async def test_cancel_on_teardown(self):
        timer = MessageTimer(10)
        timer.set("pending")
        timer.cancel()
        assert timer.message is None
        assert not timer.pending
