"""Application scheduler – Scheduler: job registry, bulk lifecycle and event hub."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import TracebackType
from typing import Any

from chronojob.adapters.apscheduler import APSchedulerTimerService
from chronojob.application.scheduler.events import JobEvent, JobEventHub, JobEventKind, Listener
from chronojob.application.scheduler.job import Job, JobCallable
from chronojob.application.scheduler.settings import SchedulerSettings
from chronojob.application.scheduler.spec import JobSpec
from chronojob.application.scheduler.timers import TimerService
from chronojob.kernel.errors import AlreadyStartedError, UnsupportedSpecError
from chronojob.kernel.time import Clock, SystemClock
from chronojob.observability.logging import Logger, NoopLogger

__all__ = ["Scheduler"]

SpecLike = JobSpec | Mapping[str, Any]


def _is_spec(value: Any) -> bool:
    return isinstance(value, (JobSpec, Mapping))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes))


class Scheduler:
    """Registry of jobs with bulk ``start``/``stop`` and lifecycle events.

    Every collaborator is injectable:

    * ``timers`` – where callbacks are armed (APScheduler background thread
      pool by default).
    * ``clock`` – source of "now" for past-date checks and event timestamps.
    * ``logger`` – structlog-style logger; omitted means no logging.

    Example::

        scheduler = Scheduler(logger=get_logger("jobs"))
        scheduler.subscribe("job_error", alert)
        scheduler.schedule(refresh_cache, "*/5 * * * *", "cache")
        scheduler.schedule(heartbeat, 30_000)
        scheduler.start()
    """

    def __init__(
        self,
        settings: SchedulerSettings | None = None,
        *,
        timers: TimerService | None = None,
        clock: Clock | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._settings = settings or SchedulerSettings()
        self._clock = clock or SystemClock()
        self._log = logger or NoopLogger()
        self._timers = timers or APSchedulerTimerService.from_settings(self._settings)
        self._events = JobEventHub(self._log)
        self._jobs: list[Job] = []
        self._started = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def jobs(self) -> tuple[Job, ...]:
        """Registered jobs in insertion order."""
        return tuple(self._jobs)

    @property
    def started(self) -> bool:
        return self._started

    @property
    def settings(self) -> SchedulerSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Arm every registered job, all or nothing.

        Triggers are validated against a single "now" before anything is
        armed; if arming a job still fails, the jobs armed by this call are
        stopped again and the error propagates. Jobs the caller already
        started directly are left as they are.
        """
        if self._started:
            raise AlreadyStartedError("Scheduler is already started")

        self._log.info("scheduler.starting", jobs=len(self._jobs))

        pending = [job for job in self._jobs if not job.running]
        now = self._clock.now()
        for job in pending:
            job.validate(now)

        armed: list[Job] = []
        try:
            for job in pending:
                job.start()
                armed.append(job)
        except Exception:
            for job in reversed(armed):
                job.stop()
            raise

        self._started = True
        self._log.info("scheduler.started", jobs=len(self._jobs), armed=len(armed))

    def stop(self) -> None:
        """Disarm every job; safe to call at any time, any number of times.

        Every job is stopped even if cancelling one of them fails; the first
        failure is re-raised once all jobs are disarmed.
        """
        self._log.info("scheduler.stopping", jobs=len(self._jobs))
        failures: list[Exception] = []
        try:
            for job in self._jobs:
                try:
                    job.stop()
                except Exception as exc:  # noqa: BLE001
                    self._log.error("scheduler.stop_failed", job_id=str(job.id), error=repr(exc))
                    failures.append(exc)
        finally:
            self._started = False
        if failures:
            raise failures[0]

    def shutdown(self, wait: bool = True) -> None:
        """Stop all jobs and release the timer service's threads."""
        self.stop()
        self._timers.shutdown(wait=wait)

    def __enter__(self) -> "Scheduler":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def schedule(
        self,
        fn_or_spec: JobCallable | SpecLike | None = None,
        trigger: Any = None,
        name: str | None = None,
        *,
        immediate: bool = False,
        args: Iterable[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Job:
        """Register one job and return its handle.

        Either pass a :class:`JobSpec` / mapping, or the positional form
        ``schedule(fn, trigger, name)``.

        Everything else must be left unset when a spec is given.

        Raises:
            MissingCallableError: no callable given.
            MissingTriggerError: no trigger given.
            UnsupportedTriggerError: the trigger's type maps to no trigger kind.
            InvalidTriggerError: non-positive interval or unparsable cron.
            UnsupportedSpecError: a spec combined with positional or keyword
                arguments, or a mapping with unknown keys.
        """
        if _is_spec(fn_or_spec):
            overrides = sorted(
                key
                for key, given in (
                    ("trigger", trigger is not None),
                    ("name", name is not None),
                    ("immediate", bool(immediate)),
                    ("args", bool(tuple(args))),
                    ("kwargs", kwargs is not None),
                )
                if given
            )
            if overrides:
                raise UnsupportedSpecError(
                    f"Arguments {overrides} cannot be combined with a job spec",
                    detail={"arguments": overrides},
                )
            spec = self._to_spec(fn_or_spec)
        else:
            spec = JobSpec(
                fn=fn_or_spec,  # type: ignore[arg-type]
                trigger=trigger,
                name=name,
                immediate=immediate,
                args=tuple(args),
                kwargs=dict(kwargs or {}),
            )
        job = self._build(spec)
        self._jobs.append(job)
        return job

    def schedule_all(self, specs: SpecLike | Iterable[SpecLike | Iterable[SpecLike]]) -> tuple[Job, ...]:
        """Register one spec or a list of specs; returns the whole registry.

        A list may contain lists of specs, which are flattened one level.
        Every spec is validated and built before any is registered.
        """
        if _is_spec(specs):
            leaves: list[Any] = [specs]
        elif _is_sequence(specs):
            leaves = []
            for item in specs:  # type: ignore[union-attr]
                if _is_spec(item):
                    leaves.append(item)
                elif _is_sequence(item):
                    for inner in item:
                        if not _is_spec(inner):
                            raise UnsupportedSpecError(
                                f"Expected a job spec inside nested list, got {type(inner).__name__}"
                            )
                        leaves.append(inner)
                else:
                    raise UnsupportedSpecError(f"Expected a job spec, got {type(item).__name__}")
        else:
            raise UnsupportedSpecError(
                f"Expected a job spec or a list of job specs, got {type(specs).__name__}"
            )

        jobs = [self._build(self._to_spec(leaf)) for leaf in leaves]
        self._jobs.extend(jobs)
        return self.jobs

    def _to_spec(self, value: SpecLike) -> JobSpec:
        if isinstance(value, JobSpec):
            return value
        return JobSpec.from_mapping(value)

    def _build(self, spec: JobSpec) -> Job:
        job = Job(
            spec,
            events=self._events,
            timers=self._timers,
            clock=self._clock,
            logger=self._log,
            default_name=self._settings.default_job_name,
            timezone=self._settings.tzinfo,
        )
        self._log.info(
            "scheduler.job_scheduled",
            job_id=str(job.id),
            name=job.name,
            kind=job.trigger.kind.value,
            immediate=job.immediate,
        )
        return job

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, kind: JobEventKind | str, listener: Listener) -> Listener:
        """Call *listener* with every event of *kind* (``job_start``, ``job_done``, ``job_error``)."""
        return self._events.subscribe(kind, listener)

    def unsubscribe(self, kind: JobEventKind | str, listener: Listener) -> bool:
        return self._events.unsubscribe(kind, listener)

    def emit(self, event: JobEvent) -> None:
        self._events.emit(event)

    def __repr__(self) -> str:
        return f"Scheduler(jobs={len(self._jobs)}, started={self._started})"
