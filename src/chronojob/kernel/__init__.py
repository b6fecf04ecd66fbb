"""Kernel – framework-agnostic building blocks (errors, time, identifiers)."""

from chronojob.kernel.errors import (
    AlreadyStartedError,
    ApplicationError,
    BaseError,
    CompletionAlreadySignalledError,
    TimerServiceClosedError,
    ConflictError,
    DomainError,
    InvalidTriggerError,
    MissingCallableError,
    MissingTriggerError,
    PastDateError,
    UnsupportedSpecError,
    UnsupportedTriggerError,
    ValidationError,
)

__all__ = [
    "AlreadyStartedError",
    "ApplicationError",
    "BaseError",
    "CompletionAlreadySignalledError",
    "ConflictError",
    "DomainError",
    "InvalidTriggerError",
    "MissingCallableError",
    "MissingTriggerError",
    "PastDateError",
    "TimerServiceClosedError",
    "UnsupportedSpecError",
    "UnsupportedTriggerError",
    "ValidationError",
]
