"""Exception types raised by statewait."""

from __future__ import annotations

from typing import Any


class StateWaitError(Exception):
    """Base class for all statewait errors."""


class StateTimeoutError(StateWaitError, TimeoutError):
    """The target state was not reached before the timeout elapsed.

    Raised only by :meth:`StateWaiter.promised`.  Subclasses the builtin
    :class:`TimeoutError` so ``except TimeoutError`` keeps working.
    """

    def __init__(self, target: Any, timeout: float) -> None:
        self.target = target
        self.timeout = timeout
        super().__init__(f"Timeout: state {target!r} not reached within {timeout:g}s")
