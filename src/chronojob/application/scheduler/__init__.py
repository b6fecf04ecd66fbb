"""Application scheduler – jobs, triggers, events and the Scheduler itself."""
from chronojob.application.scheduler.completion import Completion
from chronojob.application.scheduler.events import (
    JobDone,
    JobEvent,
    JobEventHub,
    JobEventKind,
    JobFailed,
    JobStarted,
    Listener,
)
from chronojob.application.scheduler.job import Job, JobCallable
from chronojob.application.scheduler.settings import SchedulerSettings
from chronojob.application.scheduler.spec import JobSpec
from chronojob.application.scheduler.timers import TimerCallback, TimerHandle, TimerService
from chronojob.application.scheduler.trigger import (
    CronTrigger,
    DateTrigger,
    IntervalTrigger,
    Trigger,
    TriggerKind,
)
from chronojob.application.scheduler.scheduler import Scheduler

__all__ = [
    "Completion",
    "CronTrigger",
    "DateTrigger",
    "IntervalTrigger",
    "Job",
    "JobCallable",
    "JobDone",
    "JobEvent",
    "JobEventHub",
    "JobEventKind",
    "JobFailed",
    "JobSpec",
    "JobStarted",
    "Listener",
    "Scheduler",
    "SchedulerSettings",
    "TimerCallback",
    "TimerHandle",
    "TimerService",
    "Trigger",
    "TriggerKind",
]
