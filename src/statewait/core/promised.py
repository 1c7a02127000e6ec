"""Awaitable state waits with an optional timeout.

A pending wait and a ``loop.call_later`` timer race to settle one future.
The future's ``done()`` flag is the only arbiter: whichever side finds it
still pending settles it, and the loser is released in ``finally``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from statewait.core.errors import StateTimeoutError

if TYPE_CHECKING:
    from statewait.core.waiter import StateWaiter

_log = logging.getLogger(__name__)


async def wait_for_state(waiter: StateWaiter, target: Any, timeout: float | None) -> Any:
    """Return *waiter*'s emitter once its state matches *target*.

    Args:
        waiter: The waiter to register the wait on.
        target: Target state.
        timeout: Seconds to wait; falsy means no timer.

    Raises:
        StateTimeoutError: If *timeout* elapsed before a match.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def _on_match(_state: Any, emitter: Any) -> None:
        if not future.done():
            future.set_result(emitter)

    wait = waiter.add_wait(target, _on_match)
    if future.done():
        return future.result()

    timer: asyncio.TimerHandle | None = None
    if timeout:
        def _on_timeout() -> None:
            if not future.done():
                _log.info("Timed out after %gs waiting for state %r", timeout, target)
                future.set_exception(StateTimeoutError(target, timeout))

        timer = loop.call_later(timeout, _on_timeout)

    try:
        return await future
    finally:
        if timer is not None:
            timer.cancel()
        if wait is not None:
            wait.cancel()
