"""Signal hub — one uniform "state may have changed" notification per emitter.

Whatever named events an emitter produces, its hub fires a single
``changed`` notification right after the emission has been delivered to
the emitter's own listeners.  This lets waiters react to any emission
without the emitter knowing about them.

Key behaviours:
* Exactly one hub exists per emitter instance, looked up by identity.  The
  emitter's ``emit`` is instrumented once, however many waiters wrap it.
* The registry holds hubs weakly; a hub lives only as long as the
  instrumented ``emit`` of its emitter, so an emitter that is garbage
  collected takes its hub and any pending waits with it.
* Subscribers run synchronously, in subscription order.  A subscription
  removed while a notification is being dispatched is skipped.
* Subscriber errors propagate out of :meth:`SignalHub.notify` and therefore
  out of the emitter's ``emit``.
"""

from __future__ import annotations

import functools
import logging
import uuid
import weakref
from dataclasses import dataclass
from typing import Any, Callable

_log = logging.getLogger(__name__)


@dataclass
class _Subscription:
    sub_id: str
    listener: Callable[[], Any]


class SignalHub:
    """Unified change notification for a single emitter.

    Use :func:`hub_for` rather than constructing hubs directly; a second
    hub on the same emitter would instrument ``emit`` twice.

    Args:
        emitter: Object exposing ``emit`` and ``get_state``.
    """

    def __init__(self, emitter: Any) -> None:
        self._emitter_ref = weakref.ref(emitter)
        self._emitter_name = type(emitter).__name__
        self._subscriptions: dict[str, _Subscription] = {}
        self._instrument(emitter)

    def __repr__(self) -> str:
        return f"<SignalHub {self._emitter_name} subscribers={len(self._subscriptions)}>"

    # ------------------------------------------------------------------
    # Emitter access
    # ------------------------------------------------------------------

    @property
    def emitter(self) -> Any:
        emitter = self._emitter_ref()
        if emitter is None:
            raise ReferenceError(f"{self._emitter_name} emitter no longer exists")
        return emitter

    def get_state(self) -> Any:
        """Forward to the emitter's ``get_state()``; never cached."""
        return self.emitter.get_state()

    # ------------------------------------------------------------------
    # Subscribe / unsubscribe
    # ------------------------------------------------------------------

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, listener: Callable[[], Any]) -> str:
        """Register *listener* (called with no arguments), returning its id."""
        sub_id = uuid.uuid4().hex
        self._subscriptions[sub_id] = _Subscription(sub_id=sub_id, listener=listener)
        return sub_id

    def unsubscribe(self, sub_id: str) -> None:
        """Remove the subscription *sub_id*.  Unknown ids are ignored."""
        self._subscriptions.pop(sub_id, None)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def notify(self) -> None:
        """Fire the unified notification to every current subscriber."""
        sub_ids = list(self._subscriptions)
        for sub_id in sub_ids:
            sub = self._subscriptions.get(sub_id)
            if sub is None:
                continue
            sub.listener()

    def _instrument(self, emitter: Any) -> None:
        previous_emit = emitter.emit
        notify = self.notify

        @functools.wraps(previous_emit)
        def emit(*args: Any, **kwargs: Any) -> Any:
            result = previous_emit(*args, **kwargs)
            notify()
            return result

        emitter.emit = emit
        _log.debug("Instrumented emit() of %s", self._emitter_name)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

# id(emitter) -> hub.  Values are weak: the instrumented emit() of a live
# emitter is what keeps its hub alive.
_hubs: weakref.WeakValueDictionary[int, SignalHub] = weakref.WeakValueDictionary()


def hub_for(emitter: Any) -> SignalHub:
    """Return the hub of *emitter*, creating and instrumenting it on first use.

    Raises:
        TypeError: If *emitter* does not support weak references.
        AttributeError: If *emitter* has no ``emit`` or it cannot be replaced.
    """
    key = id(emitter)
    hub = _hubs.get(key)
    if hub is not None and hub._emitter_ref() is emitter:
        return hub

    hub = SignalHub(emitter)
    _hubs[key] = hub
    return hub
