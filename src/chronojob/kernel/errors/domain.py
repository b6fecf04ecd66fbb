"""Domain errors – job registration and lifecycle rule violations."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from chronojob.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a scheduling rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input to ``schedule``/``start`` does not meet validation rules."""

    default_code = "validation_error"


class MissingCallableError(ValidationError):
    """A job spec did not carry a callable."""

    default_code = "missing_callable"

    def __init__(self, message: str = "No callable given for job", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class MissingTriggerError(ValidationError):
    """A job spec did not carry a trigger."""

    default_code = "missing_trigger"

    def __init__(self, message: str = "No trigger given for job", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class UnsupportedTriggerError(ValidationError):
    """The trigger value has a shape that maps to no trigger kind."""

    default_code = "unsupported_trigger"

    def __init__(self, value: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Unsupported trigger {value!r} of type {type(value).__name__}; "
            "expected a cron string, an int of milliseconds, a timedelta or a datetime",
            **kwargs,
        )
        self.value = value


class InvalidTriggerError(ValidationError):
    """The trigger has a supported shape but an invalid value."""

    default_code = "invalid_trigger"


class UnsupportedSpecError(ValidationError):
    """``schedule_all`` received a value that is neither a spec nor a flat list of specs."""

    default_code = "unsupported_spec"


class PastDateError(ValidationError):
    """A one-shot job's instant is not in the future when the job starts."""

    default_code = "past_date"

    def __init__(self, instant: datetime, now: datetime, **kwargs: Any) -> None:
        super().__init__(
            f"Job is in the past: {instant.isoformat()} (now {now.isoformat()})",
            detail={"instant": instant.isoformat(), "now": now.isoformat()},
            **kwargs,
        )
        self.instant = instant
        self.now = now


class ConflictError(DomainError):
    """The operation conflicts with existing state."""

    default_code = "conflict"


class AlreadyStartedError(ConflictError):
    """``start()`` was called on a scheduler or job that is already running."""

    default_code = "already_started"


__all__ = [
    "AlreadyStartedError",
    "ConflictError",
    "DomainError",
    "InvalidTriggerError",
    "MissingCallableError",
    "MissingTriggerError",
    "PastDateError",
    "UnsupportedSpecError",
    "UnsupportedTriggerError",
    "ValidationError",
]
