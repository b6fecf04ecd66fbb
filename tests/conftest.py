"""Shared fixtures: a pinned clock, a manual timer service and a scheduler wired to both."""

from __future__ import annotations

from typing import Iterator

import pytest

from chronojob.application.scheduler import JobEvent, Scheduler
from chronojob.kernel.time import FrozenClock
from chronojob.testing.fakes import FakeClock, ManualTimerService


class EventLog:
    """Records every event a scheduler emits, in order."""

    def __init__(self, scheduler: Scheduler) -> None:
        self.events: list[JobEvent] = []
        for kind in ("job_start", "job_done", "job_error"):
            scheduler.subscribe(kind, self.events.append)

    def kinds(self) -> list[str]:
        return [e.kind.value for e in self.events]

    def of(self, kind: str) -> list[JobEvent]:
        return [e for e in self.events if e.kind.value == kind]


@pytest.fixture()
def clock() -> FrozenClock:
    return FakeClock()


@pytest.fixture()
def timers(clock: FrozenClock) -> ManualTimerService:
    return ManualTimerService(clock)


@pytest.fixture()
def scheduler(timers: ManualTimerService, clock: FrozenClock) -> Iterator[Scheduler]:
    sched = Scheduler(timers=timers, clock=clock)
    yield sched
    sched.shutdown()


@pytest.fixture()
def event_log(scheduler: Scheduler) -> EventLog:
    return EventLog(scheduler)
