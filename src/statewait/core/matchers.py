"""Matchers — ``matcher(target, observed) -> bool`` predicates.

The default is plain equality.  The helpers here build the structural and
partial matchers callers commonly need, e.g. comparing one field of a
record-shaped state.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

Matcher = Callable[[Any, Any], bool]

_MISSING = object()


def equals(target: Any, observed: Any) -> bool:
    """Default matcher: ``observed == target``."""
    return observed == target


def identical(target: Any, observed: Any) -> bool:
    """Identity matcher: ``observed is target``."""
    return observed is target


def any_of(target: Any, observed: Any) -> bool:
    """*target* is a collection of acceptable states."""
    return observed in target


def predicate_matcher(target: Callable[[Any], bool], observed: Any) -> bool:
    """*target* is itself a one-argument predicate over the observed state."""
    return bool(target(observed))


def key_matcher(*keys: str) -> Matcher:
    """Return a matcher comparing only *keys* of mapping-shaped states.

    A key missing from either side never matches.
    """
    if not keys:
        raise ValueError("key_matcher() needs at least one key")

    def _match(target: Mapping[str, Any], observed: Mapping[str, Any]) -> bool:
        for key in keys:
            want = target.get(key, _MISSING)
            if want is _MISSING or observed.get(key, _MISSING) != want:
                return False
        return True

    return _match


def attribute_matcher(*names: str) -> Matcher:
    """Return a matcher comparing only attributes *names* of object states."""
    if not names:
        raise ValueError("attribute_matcher() needs at least one attribute name")

    def _match(target: Any, observed: Any) -> bool:
        for name in names:
            want = getattr(target, name, _MISSING)
            if want is _MISSING or getattr(observed, name, _MISSING) != want:
                return False
        return True

    return _match
