"""Application-layer errors – misuse of runtime collaborators."""

from __future__ import annotations

from typing import Any

from chronojob.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class CompletionAlreadySignalledError(ApplicationError):
    """A firing's completion signal was invoked more than once."""

    default_code = "completion_already_signalled"

    def __init__(self, job_id: str, **kwargs: Any) -> None:
        super().__init__(
            f"Completion for job '{job_id}' was already signalled",
            detail={"job_id": job_id},
            **kwargs,
        )
        self.job_id = job_id


class TimerServiceClosedError(ApplicationError):
    """A timer service was asked to arm a timer after it was shut down."""

    default_code = "timer_service_closed"


__all__ = [
    "ApplicationError",
    "CompletionAlreadySignalledError",
    "TimerServiceClosedError",
]
