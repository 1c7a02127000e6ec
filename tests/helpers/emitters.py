"""Test collaborators."""

from __future__ import annotations

from typing import Any, Callable

from statewait.core.emitter import StatefulEmitter


class Connection(StatefulEmitter):
    """Emits a differently-named event for every transition."""

    def __init__(self) -> None:
        super().__init__("disconnected")

    def connect(self) -> None:
        self._state = "connecting"
        self.emit("connecting")

    def established(self, peer: str = "peer") -> None:
        self._state = "connected"
        self.emit("connected", peer)

    def close(self) -> None:
        self._state = "closed"
        self.emit("close")


class DuckEmitter:
    """Duck-typed emitter recording teardown requests."""

    def __init__(self, state: Any) -> None:
        self.state = state
        self.listeners: dict[str, list[Callable[..., Any]]] = {}
        self.remove_all_calls = 0

    def get_state(self) -> Any:
        return self.state

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        self.listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Callable[..., Any]) -> None:
        self.listeners.get(event, []).remove(listener)

    def emit(self, event: str, *args: Any) -> str:
        for listener in list(self.listeners.get(event, [])):
            listener(*args)
        return f"emitted:{event}"

    def remove_all_listeners(self, event: str | None = None) -> None:
        self.remove_all_calls += 1
        if event is None:
            self.listeners.clear()
        else:
            self.listeners.pop(event, None)

    def change(self, state: Any) -> None:
        self.state = state
        self.emit("change", state)
