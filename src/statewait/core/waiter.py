"""StateWaiter — wait for an emitter's state to satisfy a matcher.

A waiter wraps any object exposing ``get_state()`` and ``emit()``.  Every
emission, whatever its name, re-evaluates the outstanding waits against the
live state; the first matching evaluation fires the wait's callback and
removes it.

Key behaviours:
* If the state already matches, the callback runs synchronously inside
  :meth:`StateWaiter.in_state` and nothing is subscribed.
* Every pending wait owns exactly one hub subscription, released exactly
  once: on its match, on :meth:`PendingWait.cancel` or on
  :meth:`StateWaiter.destroy`.
* Pending waits are evaluated independently and in registration order.
* :meth:`StateWaiter.destroy` only touches this waiter's own waits unless a
  full teardown of the emitter's listeners is requested.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from statewait.core.matchers import Matcher
from statewait.core.models.options import WaiterOptions
from statewait.core.promised import wait_for_state
from statewait.core.signal_hub import SignalHub, hub_for
from statewait.log_config.logger import ContextualLogger

_log = logging.getLogger(__name__)

StateCallback = Callable[[Any, Any], Any]


class PendingWait:
    """Handle for one outstanding wait registered with :meth:`StateWaiter.add_wait`.

    Args:
        waiter: Waiter supplying the live state, matcher and emitter.
        target: Target state.
        callback: Called as ``callback(state, emitter)`` on the first match.
        release: Called with the subscription id exactly once, when the wait
            matches or is cancelled.
        log: Logger for match messages.
    """

    def __init__(
        self,
        waiter: StateWaiter,
        target: Any,
        callback: StateCallback,
        *,
        release: Callable[[str], None],
        log: ContextualLogger | logging.Logger = _log,
    ) -> None:
        self._waiter = waiter
        self.target = target
        self._callback = callback
        self._release_hook = release
        self._log = log
        self._sub_id: str | None = None

    def __repr__(self) -> str:
        return f"<PendingWait target={self.target!r} active={self.active}>"

    @property
    def active(self) -> bool:
        """``True`` while the wait is subscribed and has not fired."""
        return self._sub_id is not None

    def cancel(self) -> None:
        """Drop the wait without firing it.  Safe to call more than once."""
        self._release()

    def _arm(self, hub: SignalHub) -> None:
        self._sub_id = hub.subscribe(self._on_changed)

    def _on_changed(self) -> None:
        state = self._waiter.get_state()
        if not self._waiter.matcher(self.target, state):
            return
        self._release()
        self._log.debug("State %r matched %r", state, self.target)
        self._callback(state, self._waiter.emitter)

    def _release(self) -> None:
        sub_id = self._sub_id
        if sub_id is None:
            return
        self._sub_id = None
        self._release_hook(sub_id)


class StateWaiter:
    """Public wrapper exposing state reads and state waits over an emitter.

    Cheap to construct; any number of waiters may wrap the same emitter.

    Args:
        emitter: Object exposing ``get_state()``, ``emit()`` and, for full
            teardown, ``remove_all_listeners()``.
        options: Prebuilt :class:`WaiterOptions`.
        **overrides: Individual :class:`WaiterOptions` fields, applied on
            top of *options*.
    """

    def __init__(
        self,
        emitter: Any,
        options: WaiterOptions | None = None,
        **overrides: Any,
    ) -> None:
        if options is None:
            options = WaiterOptions(**overrides)
        elif overrides:
            options = WaiterOptions(**{**dict(options), **overrides})

        self._emitter = emitter
        self._options = options
        self._matcher = options.effective_matcher
        self._hub = hub_for(emitter)
        # sub_id -> PendingWait, in registration order
        self._pending: dict[str, PendingWait] = {}
        self._destroyed = False
        self._log = ContextualLogger(_log, emitter=type(emitter).__name__)

    @classmethod
    def wrap(cls, emitter: Any, options: WaiterOptions | None = None, **overrides: Any) -> StateWaiter:
        return cls(emitter, options, **overrides)

    def __repr__(self) -> str:
        return (
            f"<StateWaiter {type(self._emitter).__name__} "
            f"pending={len(self._pending)} destroyed={self._destroyed}>"
        )

    def __enter__(self) -> StateWaiter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def emitter(self) -> Any:
        return self._emitter

    @property
    def options(self) -> WaiterOptions:
        return self._options

    @property
    def matcher(self) -> Matcher:
        return self._matcher

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_state(self) -> Any:
        """Return the emitter's live state."""
        return self._hub.get_state()

    def in_state(self, target: Any, callback: StateCallback) -> StateWaiter:
        """Call ``callback(state, emitter)`` once the state matches *target*.

        Fires immediately when the state already matches, otherwise on the
        first matching emission.  Returns a fresh waiter over the same
        emitter so calls can be chained.
        """
        self.add_wait(target, callback)
        return type(self)(self._emitter, self._options)

    def add_wait(self, target: Any, callback: StateCallback) -> PendingWait | None:
        """Like :meth:`in_state` but return the :class:`PendingWait` handle.

        Returns ``None`` when *callback* already fired synchronously.
        """
        current = self.get_state()
        if self._matcher(target, current):
            self._log.debug("State %r already matches %r", current, target)
            callback(current, self._emitter)
            return None

        wait = PendingWait(self, target, callback, release=self._forget, log=self._log)
        if self._destroyed:
            self._log.debug("Waiter destroyed; wait for %r will never fire", target)
            return wait

        wait._arm(self._hub)
        self._pending[wait._sub_id] = wait
        self._log.debug("Waiting for %r (current %r)", target, current)
        return wait

    async def promised(self, target: Any, timeout: float | None = None) -> Any:
        """Wait until the state matches *target* and return the emitter.

        Args:
            target: State to wait for, compared with the waiter's matcher.
            timeout: Seconds before failing; defaults to
                ``options.default_timeout``.  ``None`` or ``0`` waits forever.

        Raises:
            StateTimeoutError: If the timeout elapsed first.
        """
        return await wait_for_state(self, target, self._options.resolve_timeout(timeout))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def destroy(self, clear_collaborator: bool | None = None) -> None:
        """Cancel every pending wait of this waiter.

        Args:
            clear_collaborator: Also call the emitter's
                ``remove_all_listeners()``, dropping listeners that have
                nothing to do with this waiter.  Defaults to
                ``options.clear_collaborator_on_destroy``.
        """
        if clear_collaborator is None:
            clear_collaborator = self._options.clear_collaborator_on_destroy

        waits = list(self._pending.values())
        for wait in waits:
            wait.cancel()
        self._destroyed = True
        self._log.debug("Destroyed (%d pending waits cancelled)", len(waits))

        if clear_collaborator:
            self._emitter.remove_all_listeners()
            self._log.debug("Removed all emitter listeners")

    def destroy_in_state(self, target: Any, clear_collaborator: bool | None = None) -> StateWaiter:
        """Call :meth:`destroy` once the state matches *target*."""
        return self.in_state(target, lambda _state, _emitter: self.destroy(clear_collaborator))

    def _forget(self, sub_id: str) -> None:
        self._hub.unsubscribe(sub_id)
        self._pending.pop(sub_id, None)
