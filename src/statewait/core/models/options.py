"""Construction-time options for :class:`StateWaiter`."""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from statewait.core.matchers import Matcher, equals


class WaiterOptions(BaseModel):
    """Per-waiter configuration.  No implicit globals are consulted."""

    model_config = ConfigDict(extra="forbid")

    default_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds before promised() fails when no per-call timeout is given",
    )
    matcher: Callable[[Any, Any], bool] | None = Field(
        default=None,
        description="matcher(target, observed) -> bool; None means plain equality",
        exclude=True,
    )
    clear_collaborator_on_destroy: bool = Field(
        default=False,
        description="destroy() also removes every listener registered on the wrapped emitter",
    )

    @property
    def effective_matcher(self) -> Matcher:
        return self.matcher if self.matcher is not None else equals

    def resolve_timeout(self, timeout: float | None) -> float | None:
        """Per-call *timeout* wins, then ``default_timeout``.  Falsy means no timer."""
        value = timeout if timeout is not None else self.default_timeout
        return value or None
