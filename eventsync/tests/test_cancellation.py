"""Tests for cancellation tokens and latest-wins slots."""

import asyncio

import pytest

from eventsync.cancellation import CancelToken, RequestSlot, run_latest


class TestCancelToken:
    def test_cancel_is_idempotent(self):
        token = CancelToken("x")
        token.cancel()
        token.cancel()
        assert token.cancelled

    @pytest.mark.asyncio
    async def test_cancel_cancels_bound_task(self):
        token = CancelToken()
        task = asyncio.ensure_future(asyncio.sleep(10))
        token.bind(task)
        token.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_bind_after_cancel(self):
        token = CancelToken()
        token.cancel()
        task = asyncio.ensure_future(asyncio.sleep(10))
        token.bind(task)
        with pytest.raises(asyncio.CancelledError):
            await task


class TestRequestSlot:
    def test_begin_supersedes_previous(self):
        slot = RequestSlot("fetch")
        first = slot.begin()
        second = slot.begin()
        assert first.cancelled
        assert not slot.is_latest(first)
        assert slot.is_latest(second)

    def test_cancel_clears_active(self):
        slot = RequestSlot("fetch")
        token = slot.begin()
        assert slot.active
        slot.cancel()
        assert not slot.active
        assert not slot.is_latest(token)


class TestRunLatest:
    @pytest.mark.asyncio
    async def test_completed_operation(self):
        slot = RequestSlot("op")
        seen = []

        async def op(token):
            seen.append(slot.is_latest(token))

        assert await run_latest(slot, op) is True
        assert seen == [True]

    @pytest.mark.asyncio
    async def test_superseded_operation_is_withdrawn(self):
        slot = RequestSlot("op")
        started = asyncio.Event()
        finished = []

        async def slow(token):
            started.set()
            await asyncio.sleep(10)
            finished.append("slow")

        async def fast(token):
            finished.append("fast")

        first = asyncio.ensure_future(run_latest(slot, slow))
        await started.wait()
        assert await run_latest(slot, fast) is True
        assert await first is False
        assert finished == ["fast"]

    @pytest.mark.asyncio
    async def test_caller_cancellation_propagates(self):
        slot = RequestSlot("op")
        started = asyncio.Event()

        async def slow(token):
            started.set()
            await asyncio.sleep(10)

        outer = asyncio.ensure_future(run_latest(slot, slow))
        await started.wait()
        outer.cancel()
        with pytest.raises(asyncio.CancelledError):
            await outer

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        slot = RequestSlot("op")

        async def broken(token):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await run_latest(slot, broken)
