"""Time sources for cache freshness checks.

:class:`~configly.client.ConfiglyClient` never reads the wall clock
directly; it asks its clock for ``now()`` in Unix seconds.  Production code
uses :class:`SystemClock`; tests pass a :class:`FrozenClock` and move it
with :meth:`FrozenClock.advance`.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything with a ``now()`` returning Unix time in seconds."""

    def now(self) -> float: ...


class SystemClock:
    """Wall-clock time via :func:`time.time`."""

    def now(self) -> float:
        return time.time()


class FrozenClock:
    """A clock that only moves when told to.

    Args:
        start: Initial time in Unix seconds.

    Example::

        clock = FrozenClock(5)
        clock.advance(119)
        assert clock.now() == 124
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, value: float) -> None:
        self._now = float(value)

    def advance(self, seconds: float) -> None:
        self._now += seconds
