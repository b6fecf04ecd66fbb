"""Application scheduler – Trigger tagged union.

A job fires according to exactly one trigger kind, fixed at construction:

* :class:`CronTrigger`     – recurring, next fire time computed by the cron evaluator.
* :class:`IntervalTrigger` – recurring, fixed positive period.
* :class:`DateTrigger`     – one-shot, must lie in the future when the job starts.

:meth:`Trigger.coerce` maps the caller-supplied value to a variant by its type.
"""
from __future__ import annotations

import abc
import dataclasses
from datetime import UTC, datetime, timedelta, tzinfo
from enum import Enum
from typing import Any, ClassVar

from apscheduler.triggers.cron import CronTrigger as _CronEvaluator

from chronojob.application.scheduler.timers import TimerCallback, TimerHandle, TimerService
from chronojob.kernel.errors import InvalidTriggerError, PastDateError, UnsupportedTriggerError

__all__ = [
    "CronTrigger",
    "DateTrigger",
    "IntervalTrigger",
    "Trigger",
    "TriggerKind",
]


class TriggerKind(str, Enum):
    CRON = "cron"
    INTERVAL = "interval"
    DATE = "date"


class Trigger(abc.ABC):
    """Base of the trigger variants."""

    kind: ClassVar[TriggerKind]

    def validate(self, now: datetime) -> None:  # noqa: B027
        """Raise if the trigger cannot be armed at *now*."""

    @abc.abstractmethod
    def arm(self, timers: TimerService, fn: TimerCallback, now: datetime) -> TimerHandle:
        """Register *fn* with *timers* and return the handle."""

    @abc.abstractmethod
    def describe(self) -> str: ...

    @staticmethod
    def coerce(value: Any, *, timezone: tzinfo = UTC) -> "Trigger":
        """Build the trigger variant matching the runtime type of *value*.

        ``str`` → cron, ``int`` (milliseconds) or ``timedelta`` → interval,
        ``datetime`` → date. Naive datetimes are read in *timezone*.
        """
        if isinstance(value, Trigger):
            return value
        # bool is an int subclass; True is not a period
        if isinstance(value, bool):
            raise UnsupportedTriggerError(value)
        if isinstance(value, str):
            return CronTrigger(value, timezone=timezone)
        if isinstance(value, int):
            return IntervalTrigger.from_millis(value)
        if isinstance(value, timedelta):
            return IntervalTrigger(value)
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone)
            return DateTrigger(value)
        raise UnsupportedTriggerError(value)


@dataclasses.dataclass(frozen=True)
class CronTrigger(Trigger):
    """Fire on every occurrence of a 5-field crontab expression."""

    kind: ClassVar[TriggerKind] = TriggerKind.CRON

    expression: str
    timezone: tzinfo = UTC
    evaluator: _CronEvaluator = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.expression or not self.expression.strip():
            raise InvalidTriggerError("Cron expression must not be empty")
        try:
            evaluator = _CronEvaluator.from_crontab(self.expression, timezone=self.timezone)
        except (ValueError, TypeError) as exc:
            raise InvalidTriggerError(
                f"Invalid cron expression {self.expression!r}: {exc}",
                detail={"expression": self.expression},
                cause=exc,
            ) from exc
        object.__setattr__(self, "evaluator", evaluator)

    def next_fire_time(self, previous: datetime | None, now: datetime) -> datetime | None:
        """Return the first occurrence at or after *now* (and after *previous*)."""
        return self.evaluator.get_next_fire_time(previous, now)

    def arm(self, timers: TimerService, fn: TimerCallback, now: datetime) -> TimerHandle:  # noqa: ARG002
        return timers.call_cron(self, fn)

    def describe(self) -> str:
        return f"cron {self.expression!r}"


@dataclasses.dataclass(frozen=True)
class IntervalTrigger(Trigger):
    """Fire every ``period``; the first firing happens one period after start."""

    kind: ClassVar[TriggerKind] = TriggerKind.INTERVAL

    period: timedelta

    def __post_init__(self) -> None:
        if self.period <= timedelta(0):
            raise InvalidTriggerError(
                f"Interval must be positive, got {self.period}",
                detail={"period_ms": self.period / timedelta(milliseconds=1)},
            )

    @classmethod
    def from_millis(cls, millis: int) -> "IntervalTrigger":
        return cls(timedelta(milliseconds=millis))

    def arm(self, timers: TimerService, fn: TimerCallback, now: datetime) -> TimerHandle:  # noqa: ARG002
        return timers.call_every(self.period, fn)

    def describe(self) -> str:
        return f"every {self.period}"


@dataclasses.dataclass(frozen=True)
class DateTrigger(Trigger):
    """Fire exactly once at ``instant``."""

    kind: ClassVar[TriggerKind] = TriggerKind.DATE

    instant: datetime

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            raise InvalidTriggerError("DateTrigger requires a timezone-aware datetime")

    def delay(self, now: datetime) -> timedelta:
        return self.instant - now

    def validate(self, now: datetime) -> None:
        if self.delay(now) < timedelta(0):
            raise PastDateError(self.instant, now)

    def arm(self, timers: TimerService, fn: TimerCallback, now: datetime) -> TimerHandle:
        self.validate(now)
        return timers.call_later(self.delay(now), fn)

    def describe(self) -> str:
        return f"at {self.instant.isoformat()}"
