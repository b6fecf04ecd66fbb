"""Application scheduler – Completion signal handed to every firing."""
from __future__ import annotations

import threading
from typing import Any, Callable

from chronojob.kernel.errors import CompletionAlreadySignalledError
from chronojob.kernel.types import JobId

__all__ = ["Completion"]


class Completion:
    """Single-use ``done(error=None, data=None)`` callback.

    The job body receives one instance per firing as its first argument and
    must call it exactly once, possibly from another thread and long after the
    body returned. A truthy *error* reports failure; anything else reports
    success with *data* as the payload.

    Example::

        def refresh(done):
            try:
                rows = load()
            except OSError as exc:
                done(exc)
            else:
                done(data=len(rows))
    """

    __slots__ = ("_job_id", "_on_complete", "_lock", "_signalled")

    def __init__(self, job_id: JobId, on_complete: Callable[[Any, Any], None]) -> None:
        self._job_id = job_id
        self._on_complete = on_complete
        self._lock = threading.Lock()
        self._signalled = False

    def __call__(self, error: Any = None, data: Any = None) -> None:
        with self._lock:
            if self._signalled:
                raise CompletionAlreadySignalledError(str(self._job_id))
            self._signalled = True
        self._on_complete(error, data)

    @property
    def signalled(self) -> bool:
        return self._signalled

    @property
    def job_id(self) -> JobId:
        return self._job_id

    def __repr__(self) -> str:
        return f"Completion(job_id={str(self._job_id)!r}, signalled={self._signalled})"
