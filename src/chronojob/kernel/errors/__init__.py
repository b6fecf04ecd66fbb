"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                    (domain.py)
    │   ├── ValidationError
    │   │   ├── MissingCallableError
    │   │   ├── MissingTriggerError
    │   │   ├── UnsupportedTriggerError
    │   │   ├── InvalidTriggerError
    │   │   ├── UnsupportedSpecError
    │   │   └── PastDateError
    │   └── ConflictError
    │       └── AlreadyStartedError
    └── ApplicationError               (application.py)
        ├── CompletionAlreadySignalledError
        └── TimerServiceClosedError
"""

from chronojob.kernel.errors.application import (
    ApplicationError,
    CompletionAlreadySignalledError,
    TimerServiceClosedError,
)
from chronojob.kernel.errors.base import BaseError
from chronojob.kernel.errors.domain import (
    AlreadyStartedError,
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
