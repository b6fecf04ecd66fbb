"""Application scheduler – TimerService port.

A timer service is the only thing that knows how to wait. Jobs ask it to call
a zero-argument function later, at an instant, every period, or on each
occurrence of a cron expression, and keep the returned handle so the
registration can be cancelled.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chronojob.application.scheduler.trigger import CronTrigger

__all__ = ["TimerCallback", "TimerHandle", "TimerService"]

TimerCallback = Callable[[], None]


@runtime_checkable
class TimerHandle(Protocol):
    """An armed timer registration."""

    def cancel(self) -> None:
        """Prevent future callbacks. Must tolerate already-fired one-shots."""
        ...


@runtime_checkable
class TimerService(Protocol):
    """Port: schedule callbacks on some clock."""

    def call_later(self, delay: timedelta, fn: TimerCallback) -> TimerHandle: ...
    def call_at(self, when: datetime, fn: TimerCallback) -> TimerHandle: ...
    def call_every(self, period: timedelta, fn: TimerCallback) -> TimerHandle: ...
    def call_cron(self, trigger: "CronTrigger", fn: TimerCallback) -> TimerHandle: ...
    def shutdown(self, wait: bool = True) -> None: ...
