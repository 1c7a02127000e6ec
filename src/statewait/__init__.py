"""statewait — wait for a stateful event emitter to reach a state."""

from statewait.config import load_options
from statewait.core import (
    EventEmitter,
    PendingWait,
    SignalHub,
    StatefulEmitter,
    StateTimeoutError,
    StateWaitError,
    StateWaiter,
    hub_for,
    wait_for_state,
)
from statewait.core import matchers
from statewait.core.models import WaiterOptions

__version__ = "0.1.0"

__all__ = [
    "EventEmitter",
    "PendingWait",
    "SignalHub",
    "StateTimeoutError",
    "StateWaitError",
    "StateWaiter",
    "StatefulEmitter",
    "WaiterOptions",
    "hub_for",
    "load_options",
    "matchers",
    "wait_for_state",
]
