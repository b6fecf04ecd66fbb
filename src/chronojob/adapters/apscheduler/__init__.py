"""APScheduler adapter – thread-pool backed TimerService."""
from chronojob.adapters.apscheduler.timers import APSchedulerTimerHandle, APSchedulerTimerService

__all__ = ["APSchedulerTimerHandle", "APSchedulerTimerService"]
