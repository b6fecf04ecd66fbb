"""Testing fakes – in-memory doubles for kernel and scheduler ports."""
from chronojob.kernel.time import FrozenClock
from chronojob.testing.fakes.clock import FakeClock
from chronojob.testing.fakes.timers import ManualTimerHandle, ManualTimerService

__all__ = ["FakeClock", "FrozenClock", "ManualTimerHandle", "ManualTimerService"]
