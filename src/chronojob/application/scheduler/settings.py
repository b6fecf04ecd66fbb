"""Application scheduler – SchedulerSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chronojob.config.settings import EnvSettingsLoader, Settings
from chronojob.config.validation import InvalidSettingValueError

__all__ = ["SchedulerSettings"]


@dataclasses.dataclass
class SchedulerSettings(Settings):
    """Runtime configuration for a :class:`Scheduler`.

    Every field can be supplied through a ``CHRONOJOB_<FIELD>`` environment
    variable via :meth:`from_env`.
    """

    _prefix: ClassVar[str] = "CHRONOJOB"

    default_job_name: str = "Unknown"
    timezone: str = "UTC"
    max_instances: int = 1000
    worker_threads: int = 10

    def _validate(self) -> None:
        if not self.default_job_name:
            raise InvalidSettingValueError("default_job_name", self.default_job_name, "must not be empty")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise InvalidSettingValueError("timezone", self.timezone, "unknown time zone") from exc
        for name in ("max_instances", "worker_threads"):
            value = getattr(self, name)
            if value < 1:
                raise InvalidSettingValueError(name, value, "must be >= 1")

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SchedulerSettings":
        """Load settings from ``os.environ`` (or *environ* when given)."""
        return EnvSettingsLoader(dict(environ) if environ is not None else None).load(cls)
