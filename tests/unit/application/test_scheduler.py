"""Unit tests for Scheduler: registry, bulk lifecycle and event hub."""
from __future__ import annotations

from datetime import timedelta
from typing import Any

import pytest

from chronojob.adapters.apscheduler import APSchedulerTimerService
from chronojob.application.scheduler import (
    CronTrigger,
    IntervalTrigger,
    JobDone,
    JobSpec,
    Scheduler,
    SchedulerSettings,
    TimerService,
)
from chronojob.kernel.errors import (
    AlreadyStartedError,
    MissingCallableError,
    MissingTriggerError,
    PastDateError,
    TimerServiceClosedError,
    UnsupportedSpecError,
)
from chronojob.testing.fakes import FakeClock, ManualTimerService


def ok(done):
    done()


def other(done):
    done(data="other")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------
class TestSchedulerConstruction:
    def test_created_empty_and_stopped(self, scheduler):
        assert scheduler.jobs == ()
        assert scheduler.started is False
        assert repr(scheduler) == "Scheduler(jobs=0, started=False)"

    def test_default_timer_service_is_apscheduler(self):
        sched = Scheduler()
        try:
            assert isinstance(sched._timers, APSchedulerTimerService)  # noqa: SLF001
            assert isinstance(sched._timers, TimerService)  # noqa: SLF001
        finally:
            sched.shutdown()

    def test_settings_default_name(self, timers, clock):
        sched = Scheduler(SchedulerSettings(default_job_name="anon"), timers=timers, clock=clock)
        assert sched.schedule(ok, 1000).name == "anon"
        assert sched.settings.default_job_name == "anon"

    def test_settings_timezone_applies_to_cron(self, timers, clock):
        sched = Scheduler(SchedulerSettings(timezone="Asia/Tokyo"), timers=timers, clock=clock)
        job = sched.schedule(ok, "0 9 * * *")
        assert isinstance(job.trigger, CronTrigger)
        assert str(job.trigger.timezone) == "Asia/Tokyo"


# ---------------------------------------------------------------------------
# schedule
# ---------------------------------------------------------------------------
class TestSchedule:
    def test_positional_form(self, scheduler):
        job = scheduler.schedule(ok, 5000, "five")
        assert job.name == "five"
        assert job.trigger == IntervalTrigger(timedelta(seconds=5))
        assert scheduler.jobs == (job,)

    def test_spec_form(self, scheduler):
        job = scheduler.schedule(JobSpec(fn=ok, trigger="0 * * * *", name="hourly", immediate=True))
        assert job.name == "hourly"
        assert job.immediate is True
        assert isinstance(job.trigger, CronTrigger)

    def test_mapping_form(self, scheduler):
        job = scheduler.schedule({"fn": ok, "trigger": 1000, "name": "m"})
        assert job.name == "m"

    def test_mapping_aliases(self, scheduler):
        job = scheduler.schedule({"job": ok, "when": 1000})
        assert job.name == "Unknown"
        assert job.trigger == IntervalTrigger(timedelta(seconds=1))

    def test_mapping_unknown_key(self, scheduler):
        with pytest.raises(UnsupportedSpecError, match="Unknown job spec keys"):
            scheduler.schedule({"fn": ok, "trigger": 1000, "cron": "x"})

    def test_mapping_missing_callable(self, scheduler):
        with pytest.raises(MissingCallableError):
            scheduler.schedule({"trigger": 1000})

    def test_mapping_missing_trigger(self, scheduler):
        with pytest.raises(MissingTriggerError):
            scheduler.schedule({"fn": ok})

    def test_failed_registration_leaves_registry_untouched(self, scheduler):
        with pytest.raises(MissingTriggerError):
            scheduler.schedule(ok)
        assert scheduler.jobs == ()

    def test_spec_with_extra_arguments_rejected(self, scheduler):
        with pytest.raises(UnsupportedSpecError, match="immediate"):
            scheduler.schedule({"fn": ok, "trigger": 1000}, immediate=True)
        assert scheduler.jobs == ()

    @pytest.mark.parametrize(
        "extra",
        [
            {"trigger": 2000},
            {"name": "renamed"},
            {"args": (1,)},
            {"kwargs": {"x": 1}},
        ],
    )
    def test_spec_with_any_override_rejected(self, scheduler, extra):
        with pytest.raises(UnsupportedSpecError, match=next(iter(extra))):
            scheduler.schedule(JobSpec(fn=ok, trigger=1000), **extra)

    def test_insertion_order(self, scheduler):
        jobs = [scheduler.schedule(ok, 1000, str(i)) for i in range(5)]
        assert scheduler.jobs == tuple(jobs)

    def test_jobs_is_a_snapshot(self, scheduler):
        snapshot = scheduler.jobs
        scheduler.schedule(ok, 1000)
        assert snapshot == ()


# ---------------------------------------------------------------------------
# schedule_all
# ---------------------------------------------------------------------------
class TestScheduleAll:
    def _specs(self) -> list[JobSpec]:
        return [
            JobSpec(fn=ok, trigger=1000, name="a"),
            JobSpec(fn=other, trigger="0 * * * *", name="b"),
            JobSpec(fn=ok, trigger=2000, name="c"),
        ]

    def test_single_spec(self, scheduler):
        result = scheduler.schedule_all(JobSpec(fn=ok, trigger=1000, name="solo"))
        assert [j.name for j in result] == ["solo"]

    def test_single_mapping(self, scheduler):
        result = scheduler.schedule_all({"fn": ok, "trigger": 1000, "name": "solo"})
        assert [j.name for j in result] == ["solo"]

    def test_flat_list(self, scheduler):
        result = scheduler.schedule_all(self._specs())
        assert [j.name for j in result] == ["a", "b", "c"]

    def test_nested_list_flattened_one_level(self, scheduler):
        a, b, c = self._specs()
        result = scheduler.schedule_all([a, [b, c]])
        assert [j.name for j in result] == ["a", "b", "c"]

    def test_same_registry_as_individual_schedule(self, timers, clock):
        individual = Scheduler(timers=timers, clock=clock)
        for spec in self._specs():
            individual.schedule(spec)
        bulk = Scheduler(timers=timers, clock=clock)
        a, b, c = self._specs()
        bulk.schedule_all([[a], b, (c,)])
        assert [(j.name, j.trigger) for j in bulk.jobs] == [
            (j.name, j.trigger) for j in individual.jobs
        ]

    def test_returns_whole_registry(self, scheduler):
        first = scheduler.schedule(ok, 1000, "first")
        result = scheduler.schedule_all([JobSpec(fn=ok, trigger=1000, name="second")])
        assert result[0] is first
        assert [j.name for j in result] == ["first", "second"]

    def test_deeper_nesting_rejected(self, scheduler):
        a, b, c = self._specs()
        with pytest.raises(UnsupportedSpecError, match="nested"):
            scheduler.schedule_all([a, [b, [c]]])
        assert scheduler.jobs == ()

    @pytest.mark.parametrize("value", ["0 * * * *", 1000, None, ok])
    def test_non_spec_rejected(self, scheduler, value):
        with pytest.raises(UnsupportedSpecError):
            scheduler.schedule_all(value)

    def test_non_spec_element_rejected(self, scheduler):
        with pytest.raises(UnsupportedSpecError):
            scheduler.schedule_all([JobSpec(fn=ok, trigger=1000), 42])

    def test_invalid_leaf_registers_nothing(self, scheduler):
        with pytest.raises(MissingTriggerError):
            scheduler.schedule_all([JobSpec(fn=ok, trigger=1000), JobSpec(fn=ok, trigger=None)])
        assert scheduler.jobs == ()


# ---------------------------------------------------------------------------
# start / stop
# ---------------------------------------------------------------------------
class TestStartStop:
    def test_start_arms_every_job(self, scheduler, timers, event_log):
        a = scheduler.schedule(ok, 1000, "a")
        b = scheduler.schedule(ok, "* * * * *", "b")
        scheduler.start()
        assert scheduler.started is True
        assert a.running and b.running
        assert [e.name for e in event_log.of("job_start")] == ["a", "b"]

    def test_start_twice_raises_and_does_not_double_arm(self, scheduler, timers, event_log):
        scheduler.schedule(ok, 1000)
        scheduler.start()
        with pytest.raises(AlreadyStartedError, match="already started"):
            scheduler.start()
        assert len(event_log.of("job_start")) == 1
        assert len(timers.pending) == 1
        timers.advance(seconds=1)
        assert len(event_log.of("job_done")) == 1

    def test_stop_disarms_and_keeps_registry(self, scheduler, timers, event_log):
        jobs = (scheduler.schedule(ok, 1000), scheduler.schedule(ok, 500))
        scheduler.start()
        scheduler.stop()
        assert scheduler.started is False
        assert scheduler.jobs == jobs
        assert not any(j.running for j in jobs)
        timers.advance(seconds=5)
        assert event_log.of("job_done") == []

    def test_stop_is_idempotent_and_needs_no_start(self, scheduler):
        scheduler.schedule(ok, 1000)
        scheduler.stop()
        scheduler.stop()
        assert scheduler.started is False

    def test_start_stop_start(self, scheduler, timers, event_log):
        scheduler.schedule(ok, 1000)
        scheduler.start()
        scheduler.stop()
        scheduler.start()
        timers.advance(seconds=1)
        assert event_log.kinds() == ["job_start", "job_start", "job_done"]

    def test_stop_disarms_remaining_jobs_when_cancel_fails(self, clock):
        class BrokenHandle:
            def __init__(self, inner):
                self._inner = inner

            def cancel(self):
                self._inner.cancel()
                raise RuntimeError("cancel failed")

        class BrokenCronTimers(ManualTimerService):
            def call_cron(self, trigger, fn):
                return BrokenHandle(super().call_cron(trigger, fn))

        timers = BrokenCronTimers(clock)
        sched = Scheduler(timers=timers, clock=clock)
        done: list[Any] = []
        sched.subscribe("job_done", done.append)
        broken = sched.schedule(ok, "0 * * * *")
        healthy = sched.schedule(ok, 1000)
        sched.start()
        with pytest.raises(RuntimeError, match="cancel failed"):
            sched.stop()
        assert sched.started is False
        assert broken.running is False
        assert healthy.running is False
        timers.advance(seconds=5)
        assert done == []
        sched.start()
        assert sched.started is True

    def test_empty_scheduler_starts(self, scheduler):
        scheduler.start()
        assert scheduler.started is True

    def test_past_date_aborts_before_arming_anything(self, scheduler, timers, event_log):
        good = scheduler.schedule(ok, 1000, "good")
        scheduler.schedule(ok, timers.clock.now() - timedelta(seconds=1), "late")
        with pytest.raises(PastDateError):
            scheduler.start()
        assert scheduler.started is False
        assert good.running is False
        assert timers.pending == []
        assert event_log.events == []
        scheduler.stop()

    def test_arming_failure_rolls_back(self, clock):
        class FlakyTimers(ManualTimerService):
            def call_cron(self, trigger, fn):
                raise RuntimeError("backend down")

        timers = FlakyTimers(clock)
        sched = Scheduler(timers=timers, clock=clock)
        first = sched.schedule(ok, 1000)
        sched.schedule(ok, "0 * * * *")
        with pytest.raises(RuntimeError, match="backend down"):
            sched.start()
        assert first.running is False
        assert sched.started is False
        assert timers.pending == []

    def test_jobs_started_directly_are_not_rearmed(self, scheduler, timers, event_log):
        direct = scheduler.schedule(ok, 1000, "direct")
        scheduler.schedule(ok, 1000, "bulk")
        direct.start()
        scheduler.start()
        assert [e.name for e in event_log.of("job_start")] == ["direct", "bulk"]
        assert len(timers.pending) == 2

    def test_jobs_fire_after_start(self, scheduler, timers, event_log):
        scheduler.schedule(ok, 1000, "a")
        scheduler.schedule(other, 2000, "b")
        scheduler.start()
        timers.advance(seconds=2)
        done = event_log.of("job_done")
        assert [e.data for e in done] == [None, None, "other"]

    def test_shutdown_closes_timers(self, clock):
        timers = ManualTimerService(clock)
        sched = Scheduler(timers=timers, clock=clock)
        job = sched.schedule(ok, 1000)
        sched.start()
        sched.shutdown()
        assert job.running is False
        with pytest.raises(TimerServiceClosedError):
            job.start()

    def test_context_manager(self, clock):
        timers = ManualTimerService(clock)
        with Scheduler(timers=timers, clock=clock) as sched:
            job = sched.schedule(ok, 1000)
            assert sched.started is True
            job.start()
            assert job.running
        assert sched.started is False
        assert job.running is False


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
class TestSchedulerEvents:
    def test_subscribe_and_unsubscribe(self, scheduler, timers):
        seen: list[Any] = []
        scheduler.subscribe("job_done", seen.append)
        job = scheduler.schedule(ok, 1000)
        job.start()
        timers.advance(seconds=1)
        assert scheduler.unsubscribe("job_done", seen.append) is True
        timers.advance(seconds=1)
        assert len(seen) == 1
        assert seen[0].job_id == job.id

    def test_emit_delivers(self, scheduler, event_log):
        evt = JobDone(job_id=scheduler.schedule(ok, 1000).id, time=FakeClock().now())
        scheduler.emit(evt)
        assert event_log.events == [evt]

    def test_job_start_precedes_completion_per_job(self, scheduler, timers, event_log):
        a = scheduler.schedule(ok, 1000, immediate=True)
        b = scheduler.schedule(ok, 1000)
        scheduler.start()
        timers.advance(seconds=1)
        for job in (a, b):
            kinds = [e.kind.value for e in event_log.events if e.job_id == job.id]
            assert kinds[0] == "job_start"

    def test_logger_receives_lifecycle_events(self, timers, clock):
        records: list[tuple[str, dict[str, Any]]] = []

        class Recorder:
            def debug(self, event, **kw): records.append((event, kw))
            info = warning = error = critical = debug

        sched = Scheduler(timers=timers, clock=clock, logger=Recorder())
        sched.schedule(ok, 1000, "logged")
        sched.start()
        sched.stop()
        names = [name for name, _ in records]
        assert names == [
            "scheduler.job_scheduled",
            "scheduler.starting",
            "job.arming",
            "scheduler.started",
            "scheduler.stopping",
            "job.stopped",
        ]
        arming = dict(records)["job.arming"]
        assert arming["kind"] == "interval"
        assert arming["name"] == "logged"
