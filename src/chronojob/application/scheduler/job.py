"""Application scheduler – Job: one trigger bound to one callable."""
from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from typing import Any, Callable, Mapping

from chronojob.application.scheduler.completion import Completion
from chronojob.application.scheduler.events import JobDone, JobEventHub, JobFailed, JobStarted
from chronojob.application.scheduler.spec import JobSpec
from chronojob.application.scheduler.timers import TimerHandle, TimerService
from chronojob.application.scheduler.trigger import Trigger
from chronojob.kernel.errors import AlreadyStartedError, MissingCallableError, MissingTriggerError
from chronojob.kernel.time import Clock, SystemClock
from chronojob.kernel.types import JobId
from chronojob.observability.logging import Logger, NoopLogger

__all__ = ["Job", "JobCallable"]

#: ``fn(done, *args, **kwargs)`` where ``done`` is a :class:`Completion`.
JobCallable = Callable[..., Any]

DEFAULT_JOB_NAME = "Unknown"


class Job:
    """A single schedule binding.

    Built by :meth:`Scheduler.schedule`; the returned handle can also be
    started and stopped directly. ``events`` is the owning scheduler's hub and
    is only used to emit.
    """

    def __init__(
        self,
        spec: JobSpec,
        *,
        events: JobEventHub,
        timers: TimerService,
        clock: Clock | None = None,
        logger: Logger | None = None,
        default_name: str = DEFAULT_JOB_NAME,
        timezone: tzinfo = UTC,
    ) -> None:
        if spec.fn is None:
            raise MissingCallableError()
        if not callable(spec.fn):
            raise MissingCallableError(f"Job callable {spec.fn!r} is not callable")
        if spec.trigger is None:
            raise MissingTriggerError()

        self._id = JobId.generate()
        self._name = spec.name or default_name
        self._trigger = Trigger.coerce(spec.trigger, timezone=timezone)
        self._fn: JobCallable = spec.fn
        self._args = tuple(spec.args)
        self._kwargs: Mapping[str, Any] = dict(spec.kwargs)
        self._immediate = spec.immediate
        self._events = events
        self._timers = timers
        self._clock = clock or SystemClock()
        self._log = logger or NoopLogger()
        self._handle: TimerHandle | None = None

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def id(self) -> JobId:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def trigger(self) -> Trigger:
        return self._trigger

    @property
    def immediate(self) -> bool:
        return self._immediate

    @property
    def running(self) -> bool:
        """True while a timer registration is armed."""
        return self._handle is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def validate(self, now: datetime | None = None) -> None:
        """Raise if the trigger could not be armed at *now* (e.g. a past date)."""
        self._trigger.validate(now or self._clock.now())

    def start(self) -> None:
        """Emit ``job_start``, run the immediate firing if set, then arm the trigger."""
        if self._handle is not None:
            raise AlreadyStartedError(
                f"Job '{self._name}' is already started",
                detail={"job_id": str(self._id)},
            )

        self._events.emit(JobStarted(job_id=self._id, time=self._clock.now(), name=self._name))

        if self._immediate:
            self._fire()

        self._log.info(
            "job.arming",
            job_id=str(self._id),
            name=self._name,
            kind=self._trigger.kind.value,
            trigger=self._trigger.describe(),
        )
        self._handle = self._trigger.arm(self._timers, self._fire, self._clock.now())

    def stop(self) -> None:
        """Cancel the armed registration; nothing happens if none is armed.

        A firing already in flight is not interrupted and may still report.
        """
        handle, self._handle = self._handle, None
        if handle is None:
            return
        handle.cancel()
        self._log.info("job.stopped", job_id=str(self._id), name=self._name)

    # ------------------------------------------------------------------
    # Firing and completion
    # ------------------------------------------------------------------

    def job_ended(self, error: Any = None, data: Any = None) -> None:
        """Turn one firing's outcome into a ``job_error`` or ``job_done`` event."""
        if error:
            self._events.emit(
                JobFailed(job_id=self._id, time=self._clock.now(), error=error, data=data)
            )
        else:
            self._events.emit(JobDone(job_id=self._id, time=self._clock.now(), data=data))

    def _fire(self) -> None:
        done = Completion(self._id, self.job_ended)
        try:
            self._fn(done, *self._args, **self._kwargs)
        except Exception as exc:  # noqa: BLE001
            self._log.warning(
                "job.firing_raised",
                job_id=str(self._id),
                name=self._name,
                error=repr(exc),
            )
            if not done.signalled:
                done(exc)

    def __repr__(self) -> str:
        return (
            f"Job(id={str(self._id)!r}, name={self._name!r}, "
            f"trigger={self._trigger.describe()!r}, running={self.running})"
        )
