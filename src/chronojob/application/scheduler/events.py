"""Application scheduler – lifecycle events and the listener hub."""
from __future__ import annotations

import dataclasses
import threading
from datetime import datetime
from enum import Enum
from typing import Any, Callable, ClassVar

from chronojob.kernel.errors import BaseError
from chronojob.kernel.types import JobId
from chronojob.observability.logging import Logger, NoopLogger

__all__ = [
    "JobDone",
    "JobEvent",
    "JobEventHub",
    "JobEventKind",
    "JobFailed",
    "JobStarted",
    "Listener",
]


class JobEventKind(str, Enum):
    START = "job_start"
    DONE = "job_done"
    ERROR = "job_error"


def _serialise_error(error: Any) -> Any:
    if isinstance(error, BaseError):
        return error.to_dict()
    if isinstance(error, BaseException):
        return repr(error)
    return error


@dataclasses.dataclass(frozen=True)
class JobEvent:
    """Base of the three lifecycle events; every event names its job and time."""

    kind: ClassVar[JobEventKind]

    job_id: JobId
    time: datetime

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "event": self.kind.value,
            "job_id": str(self.job_id),
            "time": self.time.isoformat(),
        }
        for field in dataclasses.fields(self)[2:]:
            payload[field.name] = getattr(self, field.name)
        return payload


@dataclasses.dataclass(frozen=True)
class JobStarted(JobEvent):
    """Emitted synchronously by ``Job.start()`` before any timer fires."""

    kind: ClassVar[JobEventKind] = JobEventKind.START

    name: str


@dataclasses.dataclass(frozen=True)
class JobDone(JobEvent):
    """A firing signalled success."""

    kind: ClassVar[JobEventKind] = JobEventKind.DONE

    data: Any = None


@dataclasses.dataclass(frozen=True)
class JobFailed(JobEvent):
    """A firing signalled failure."""

    kind: ClassVar[JobEventKind] = JobEventKind.ERROR

    error: Any
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["error"] = _serialise_error(self.error)
        return payload


Listener = Callable[[JobEvent], None]


class JobEventHub:
    """Map of event kind to subscribed listeners.

    Listeners run synchronously on the emitting thread, in subscription
    order. A listener that raises is logged and the remaining listeners still
    receive the event.
    """

    def __init__(self, logger: Logger | None = None) -> None:
        self._log = logger or NoopLogger()
        self._listeners: dict[JobEventKind, list[Listener]] = {kind: [] for kind in JobEventKind}
        self._lock = threading.Lock()

    def subscribe(self, kind: JobEventKind | str, listener: Listener) -> Listener:
        """Register *listener* for *kind*; returns it so this can decorate."""
        with self._lock:
            self._listeners[JobEventKind(kind)].append(listener)
        return listener

    def unsubscribe(self, kind: JobEventKind | str, listener: Listener) -> bool:
        """Remove *listener*; ``False`` when it was not subscribed."""
        with self._lock:
            listeners = self._listeners[JobEventKind(kind)]
            if listener in listeners:
                listeners.remove(listener)
                return True
        return False

    def listeners(self, kind: JobEventKind | str) -> list[Listener]:
        with self._lock:
            return list(self._listeners[JobEventKind(kind)])

    def emit(self, event: JobEvent) -> None:
        for listener in self.listeners(event.kind):
            try:
                listener(event)
            except Exception as exc:  # noqa: BLE001
                self._log.error(
                    "scheduler.listener.error",
                    job_event=event.kind.value,
                    job_id=str(event.job_id),
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=repr(exc),
                )
