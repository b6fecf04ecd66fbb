"""Heartbeat example: an interval job, a cron job and a one-shot.

Run with::

    pip install -e .
    python docs/examples/heartbeat.py

Settings can be overridden through the environment, e.g.
``CHRONOJOB_TIMEZONE=Europe/Berlin``.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import UTC, datetime, timedelta

from chronojob.application.scheduler import JobSpec, Scheduler, SchedulerSettings
from chronojob.observability.logging import configure_logging, get_logger

log = get_logger("heartbeat")


def beat(done, counter):
    counter.append(time.monotonic())
    done(data=len(counter))


def flaky(done):
    done(RuntimeError("upstream unavailable"))


def report(done):
    # completion signalled from another thread
    threading.Timer(0.2, done, kwargs={"data": "report sent"}).start()


def main() -> None:
    configure_logging(logging.INFO, json_format=False)
    beats: list[float] = []

    scheduler = Scheduler(SchedulerSettings.from_env(), logger=get_logger("chronojob"))
    scheduler.subscribe("job_done", lambda e: log.info("done", job_id=str(e.job_id), data=e.data))
    scheduler.subscribe("job_error", lambda e: log.warning("failed", job_id=str(e.job_id), error=repr(e.error)))

    scheduler.schedule_all(
        [
            JobSpec(fn=beat, trigger=1_000, name="beat", immediate=True, args=(beats,)),
            JobSpec(fn=flaky, trigger="* * * * *", name="flaky"),
            {"fn": report, "trigger": datetime.now(UTC) + timedelta(seconds=3), "name": "report"},
        ]
    )

    with scheduler:
        time.sleep(5)

    log.info("finished", beats=len(beats))


if __name__ == "__main__":
    main()
