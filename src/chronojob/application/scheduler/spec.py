"""Application scheduler – JobSpec, the structured form of a registration."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Mapping

from chronojob.kernel.errors import UnsupportedSpecError

__all__ = ["JobSpec"]

_FN_KEYS = ("fn", "callable", "job")
_TRIGGER_KEYS = ("trigger", "when")
_KNOWN_KEYS = frozenset(_FN_KEYS + _TRIGGER_KEYS + ("name", "immediate", "args", "kwargs"))


@dataclasses.dataclass(frozen=True)
class JobSpec:
    """Everything needed to build a job.

    ``fn`` and ``trigger`` are checked when the job is built, so a spec with
    either missing can exist; ``Scheduler.schedule`` rejects it.
    """

    fn: Callable[..., Any] | None
    trigger: Any
    name: str | None = None
    immediate: bool = False
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "JobSpec":
        """Build a spec from a dict.

        Accepts ``fn`` (or ``callable`` / ``job``), ``trigger`` (or ``when``),
        ``name``, ``immediate``, ``args`` and ``kwargs``.
        """
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise UnsupportedSpecError(
                f"Unknown job spec keys: {sorted(unknown)}",
                detail={"keys": sorted(unknown)},
            )
        fn = next((data[k] for k in _FN_KEYS if data.get(k) is not None), None)
        trigger = next((data[k] for k in _TRIGGER_KEYS if data.get(k) is not None), None)
        return cls(
            fn=fn,
            trigger=trigger,
            name=data.get("name"),
            immediate=bool(data.get("immediate", False)),
            args=tuple(data.get("args") or ()),
            kwargs=dict(data.get("kwargs") or {}),
        )
