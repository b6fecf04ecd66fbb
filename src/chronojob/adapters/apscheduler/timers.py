"""APScheduler adapter – APSchedulerTimerService (requires apscheduler>=3.10,<4)."""
from __future__ import annotations

import threading
import uuid
from datetime import UTC, datetime, timedelta, tzinfo
from typing import TYPE_CHECKING

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from chronojob.kernel.errors import TimerServiceClosedError

if TYPE_CHECKING:
    from chronojob.application.scheduler.settings import SchedulerSettings
    from chronojob.application.scheduler.timers import TimerCallback
    from chronojob.application.scheduler.trigger import CronTrigger

__all__ = ["APSchedulerTimerHandle", "APSchedulerTimerService"]


class APSchedulerTimerHandle:
    """Handle to one APScheduler job."""

    def __init__(self, scheduler: BaseScheduler, job_id: str) -> None:
        self._scheduler = scheduler
        self._job_id = job_id

    @property
    def job_id(self) -> str:
        return self._job_id

    def cancel(self) -> None:
        try:
            self._scheduler.remove_job(self._job_id)
        except JobLookupError:
            # one-shot jobs are removed by APScheduler once they have run
            pass


class APSchedulerTimerService:
    """TimerService backed by an APScheduler ``BackgroundScheduler``.

    Callbacks run on the scheduler's worker thread pool. The background
    scheduler is started lazily on the first armed timer and stopped by
    :meth:`shutdown`; a shut-down service cannot be reused.
    """

    def __init__(
        self,
        *,
        timezone: tzinfo = UTC,
        max_instances: int = 1000,
        worker_threads: int = 10,
        scheduler: BaseScheduler | None = None,
    ) -> None:
        self._timezone = timezone
        self._scheduler = scheduler or BackgroundScheduler(
            executors={"default": ThreadPoolExecutor(worker_threads)},
            job_defaults={
                "coalesce": False,
                "max_instances": max_instances,
                "misfire_grace_time": None,
            },
            timezone=timezone,
        )
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def from_settings(cls, settings: "SchedulerSettings") -> "APSchedulerTimerService":
        return cls(
            timezone=settings.tzinfo,
            max_instances=settings.max_instances,
            worker_threads=settings.worker_threads,
        )

    @property
    def running(self) -> bool:
        return bool(self._scheduler.running)

    def _ensure_running(self) -> None:
        with self._lock:
            if self._closed:
                raise TimerServiceClosedError("Timer service has been shut down")
            if not self._scheduler.running:
                self._scheduler.start()

    def _add(self, fn: "TimerCallback", trigger: object) -> APSchedulerTimerHandle:
        self._ensure_running()
        job = self._scheduler.add_job(fn, trigger=trigger, id=uuid.uuid4().hex)
        return APSchedulerTimerHandle(self._scheduler, job.id)

    def call_later(self, delay: timedelta, fn: "TimerCallback") -> APSchedulerTimerHandle:
        return self.call_at(datetime.now(UTC) + delay, fn)

    def call_at(self, when: datetime, fn: "TimerCallback") -> APSchedulerTimerHandle:
        return self._add(fn, DateTrigger(run_date=when, timezone=self._timezone))

    def call_every(self, period: timedelta, fn: "TimerCallback") -> APSchedulerTimerHandle:
        return self._add(
            fn,
            IntervalTrigger(seconds=period.total_seconds(), timezone=self._timezone),
        )

    def call_cron(self, trigger: "CronTrigger", fn: "TimerCallback") -> APSchedulerTimerHandle:
        return self._add(fn, trigger.evaluator)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
            if self._scheduler.running:
                self._scheduler.shutdown(wait=wait)
