"""Reference event emitters.

:class:`EventEmitter` is a small synchronous named-event emitter and
:class:`StatefulEmitter` adds a state value that announces its own changes.
Either can be subclassed by collaborators that have no emitter of their own.

Key behaviours:
* Listeners run synchronously, in registration order, inside :meth:`emit`.
* A listener that raises aborts the emission and the error propagates.
* Listeners registered with :meth:`once` are removed before they run.
"""

from __future__ import annotations

import contextlib
import logging
from collections import defaultdict
from typing import Any, Callable

from statewait.core.interfaces.emitter import EmitterInterface, StatefulEmitterInterface

_log = logging.getLogger(__name__)

Listener = Callable[..., Any]

STATE_CHANGED = "state_changed"


class EventEmitter(EmitterInterface):
    """Synchronous named-event emitter."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on(self, event: str, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def once(self, event: str, listener: Listener) -> None:
        """Register *listener* for the next emission of *event* only."""

        def _once(*args: Any, **kwargs: Any) -> Any:
            self.off(event, _once)
            return listener(*args, **kwargs)

        self.on(event, _once)

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event)
        if not listeners:
            return
        with contextlib.suppress(ValueError):
            listeners.remove(listener)
        if not listeners:
            del self._listeners[event]

    remove_listener = off

    def remove_all_listeners(self, event: str | None = None) -> None:
        if event is None:
            self._listeners.clear()
            return
        self._listeners.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def emit(self, event: str, *args: Any, **kwargs: Any) -> bool:
        """Call the listeners of *event*; return ``True`` if there were any."""
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            listener(*args, **kwargs)
        return bool(listeners)


class StatefulEmitter(EventEmitter, StatefulEmitterInterface):
    """Emitter holding a state value.

    :meth:`set_state` stores the new value and emits ``state_changed`` with
    ``(new_state, old_state)``.

    Args:
        initial_state: State reported until the first :meth:`set_state`.
    """

    def __init__(self, initial_state: Any = None) -> None:
        super().__init__()
        self._state = initial_state

    def get_state(self) -> Any:
        return self._state

    def set_state(self, new_state: Any, event: str = STATE_CHANGED) -> None:
        old_state = self._state
        self._state = new_state
        _log.debug("%s state: %r -> %r", type(self).__name__, old_state, new_state)
        self.emit(event, new_state, old_state)
