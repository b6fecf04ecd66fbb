"""Kernel time – Clock protocol + implementations.

Every "now" the scheduler needs (past-date checks, event timestamps) is read
through a :class:`Clock` so tests can pin or step time.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: abstract clock for deterministic testing."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed point in time until advanced."""

    def __init__(self, fixed: datetime) -> None:
        if fixed.tzinfo is None:
            raise ValueError("FrozenClock requires a timezone-aware datetime")
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)

    def set(self, moment: datetime) -> None:
        """Jump to *moment*; moving backwards is rejected."""
        if moment < self._fixed:
            raise ValueError("FrozenClock cannot move backwards")
        self._fixed = moment


__all__ = ["Clock", "FrozenClock", "SystemClock"]
