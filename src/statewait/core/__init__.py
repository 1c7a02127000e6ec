"""Core services: signal hub, state waiter, awaitable waits, reference emitters."""

from statewait.core.emitter import EventEmitter, StatefulEmitter
from statewait.core.errors import StateTimeoutError, StateWaitError
from statewait.core.promised import wait_for_state
from statewait.core.signal_hub import SignalHub, hub_for
from statewait.core.waiter import PendingWait, StateWaiter

__all__ = [
    "EventEmitter",
    "PendingWait",
    "SignalHub",
    "StateTimeoutError",
    "StateWaitError",
    "StateWaiter",
    "StatefulEmitter",
    "hub_for",
    "wait_for_state",
]
