"""Testing – deterministic doubles for the scheduler's ports."""
from chronojob.testing.fakes import FakeClock, ManualTimerHandle, ManualTimerService

__all__ = ["FakeClock", "ManualTimerHandle", "ManualTimerService"]
