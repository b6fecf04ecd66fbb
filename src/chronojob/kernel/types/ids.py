"""String-based identifier value objects."""

from __future__ import annotations

import dataclasses
import uuid

from chronojob.kernel.errors.domain import ValidationError


@dataclasses.dataclass(frozen=True, slots=True)
class JobId:
    """Opaque job identifier, stable for a job's lifetime.

    Examples::

        jid = JobId.generate()           # new random id
        jid = JobId.from_str("abc-123")  # from existing string
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValidationError("JobId must not be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "JobId":
        """Return a new random (UUID v4) ``JobId``."""
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_str(cls, value: str) -> "JobId":
        return cls(value)


__all__ = ["JobId"]
