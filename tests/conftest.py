"""Shared pytest fixtures for statewait tests."""

from __future__ import annotations

import pytest

from statewait.core.emitter import StatefulEmitter
from statewait.core.waiter import StateWaiter
from tests.helpers.emitters import Connection, DuckEmitter


@pytest.fixture
def emitter() -> StatefulEmitter:
    """Reference emitter starting in ``"idle"``."""
    return StatefulEmitter("idle")


@pytest.fixture
def waiter(emitter: StatefulEmitter) -> StateWaiter:
    return StateWaiter(emitter)


@pytest.fixture
def connection() -> Connection:
    return Connection()


@pytest.fixture
def duck() -> DuckEmitter:
    """Emitter that shares no base class with statewait."""
    return DuckEmitter("idle")
