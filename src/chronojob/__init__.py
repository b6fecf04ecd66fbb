"""
chronojob – In-process job scheduler.

Import path convention::

    from chronojob.application.scheduler import Scheduler, JobSpec
    from chronojob.kernel.errors import PastDateError
    from chronojob.adapters.apscheduler import APSchedulerTimerService
    from chronojob.testing.fakes import ManualTimerService
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
