"""Tests for StateWaiter.promised (awaitable waits with timeout)."""

from __future__ import annotations

import asyncio
import time

import pytest

from statewait.core.emitter import StatefulEmitter
from statewait.core.errors import StateTimeoutError, StateWaitError
from statewait.core.promised import wait_for_state
from statewait.core.signal_hub import hub_for
from statewait.core.waiter import StateWaiter


def _set_later(emitter: StatefulEmitter, delay: float, state: object) -> None:
    asyncio.get_running_loop().call_later(delay, emitter.set_state, state)


class TestResolution:
    async def test_resolves_immediately_when_already_in_state(self, emitter, waiter):
        assert await waiter.promised("idle") is emitter

    async def test_resolves_with_emitter_on_transition(self, emitter, waiter):
        _set_later(emitter, 0.01, "ready")
        result = await waiter.promised("ready")
        assert result is emitter

    async def test_resolves_before_timeout(self, emitter, waiter):
        _set_later(emitter, 0.01, "ready")
        start = time.monotonic()
        result = await waiter.promised("ready", timeout=0.5)
        elapsed = time.monotonic() - start
        assert result is emitter
        assert elapsed < 0.4

    async def test_concurrent_waits_on_same_waiter(self, emitter, waiter):
        _set_later(emitter, 0.01, "ready")
        _set_later(emitter, 0.02, "done")
        ready, done = await asyncio.gather(
            waiter.promised("ready", timeout=1.0),
            waiter.promised("done", timeout=1.0),
        )
        assert ready is emitter
        assert done is emitter

    async def test_wait_released_after_resolution(self, emitter, waiter):
        _set_later(emitter, 0.01, "ready")
        await waiter.promised("ready", timeout=1.0)
        assert waiter.pending_count == 0
        assert hub_for(emitter).subscriber_count == 0

    async def test_resolution_does_not_destroy_other_waits(self, emitter, waiter):
        calls = []
        waiter.in_state("final", lambda state, em: calls.append(state))

        _set_later(emitter, 0.01, "ready")
        await waiter.promised("ready", timeout=1.0)

        assert not waiter.destroyed
        emitter.set_state("final")
        assert calls == ["final"]


class TestTimeout:
    async def test_rejects_when_state_never_reached(self, waiter):
        start = time.monotonic()
        with pytest.raises(StateTimeoutError) as excinfo:
            await waiter.promised("ready", timeout=0.05)
        elapsed = time.monotonic() - start
        assert elapsed >= 0.04
        assert excinfo.value.target == "ready"
        assert excinfo.value.timeout == 0.05

    async def test_timeout_error_types(self, waiter):
        with pytest.raises(TimeoutError):
            await waiter.promised("ready", timeout=0.01)
        with pytest.raises(StateWaitError):
            await waiter.promised("ready", timeout=0.01)

    async def test_timeout_releases_pending_wait(self, emitter, waiter):
        with pytest.raises(StateTimeoutError):
            await waiter.promised("ready", timeout=0.01)
        assert waiter.pending_count == 0
        assert hub_for(emitter).subscriber_count == 0

    async def test_default_timeout_from_options(self, emitter):
        waiter = StateWaiter(emitter, default_timeout=0.02)
        with pytest.raises(StateTimeoutError) as excinfo:
            await waiter.promised("ready")
        assert excinfo.value.timeout == 0.02

    async def test_explicit_timeout_overrides_default(self, emitter):
        waiter = StateWaiter(emitter, default_timeout=0.01)
        _set_later(emitter, 0.05, "ready")
        assert await waiter.promised("ready", timeout=1.0) is emitter

    async def test_zero_timeout_disables_timer(self, emitter):
        waiter = StateWaiter(emitter, default_timeout=0.01)
        _set_later(emitter, 0.05, "ready")
        assert await waiter.promised("ready", timeout=0) is emitter

    async def test_late_transition_after_timeout_is_harmless(self, emitter, waiter):
        with pytest.raises(StateTimeoutError):
            await waiter.promised("ready", timeout=0.01)
        emitter.set_state("ready")
        assert waiter.pending_count == 0


class TestCancellation:
    async def test_cancelled_task_releases_wait(self, emitter, waiter):
        task = asyncio.create_task(waiter.promised("ready", timeout=5.0))
        await asyncio.sleep(0.01)
        assert waiter.pending_count == 1

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert waiter.pending_count == 0
        assert hub_for(emitter).subscriber_count == 0

    async def test_outer_wait_for_cancels_inner_wait(self, waiter):
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(waiter.promised("ready"), timeout=0.01)
        assert waiter.pending_count == 0


class TestWaitForState:
    async def test_function_form(self, emitter, waiter):
        _set_later(emitter, 0.01, "ready")
        assert await wait_for_state(waiter, "ready", None) is emitter

    async def test_function_form_timeout(self, waiter):
        with pytest.raises(StateTimeoutError):
            await wait_for_state(waiter, "ready", 0.01)
