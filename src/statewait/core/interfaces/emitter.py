"""Collaborator interfaces (ABCs).

Describes the shape statewait expects from a wrapped object.  Wrapped
objects do **not** have to inherit from these classes; any object with the
same methods works.  They exist so collaborators can declare intent and so
the reference implementations in :mod:`statewait.core.emitter` have a
contract to satisfy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


# ---------------------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------------------

class EmitterInterface(ABC):
    """Named-event emitter."""

    @abstractmethod
    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """Register *listener* for *event*."""

    @abstractmethod
    def off(self, event: str, listener: Callable[..., Any]) -> None:
        """Remove *listener* from *event*.  Unknown listeners are ignored."""

    @abstractmethod
    def emit(self, event: str, *args: Any, **kwargs: Any) -> Any:
        """Call every listener registered for *event*."""

    @abstractmethod
    def remove_all_listeners(self, event: str | None = None) -> None:
        """Remove the listeners of *event*, or of every event when *None*."""


# ---------------------------------------------------------------------------
# Stateful emitter
# ---------------------------------------------------------------------------

class StatefulEmitterInterface(EmitterInterface):
    """An emitter that also reports its current state on demand."""

    @abstractmethod
    def get_state(self) -> Any:
        """Return the current state.  Must be cheap and synchronous."""
