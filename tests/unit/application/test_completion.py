"""Unit tests for the single-use Completion signal."""
from __future__ import annotations

import threading

import pytest

from chronojob.application.scheduler import Completion
from chronojob.kernel.errors import CompletionAlreadySignalledError
from chronojob.kernel.types import JobId


class TestCompletion:
    def _make(self) -> tuple[Completion, list[tuple[object, object]]]:
        calls: list[tuple[object, object]] = []
        done = Completion(JobId("j1"), lambda err, data: calls.append((err, data)))
        return done, calls

    def test_success_forwards_data(self):
        done, calls = self._make()
        done(data={"rows": 3})
        assert calls == [(None, {"rows": 3})]
        assert done.signalled is True

    def test_positional_error(self):
        done, calls = self._make()
        err = RuntimeError("boom")
        done(err)
        assert calls == [(err, None)]

    def test_error_with_data(self):
        done, calls = self._make()
        done("failed", "partial")
        assert calls == [("failed", "partial")]

    def test_no_arguments_is_success(self):
        done, calls = self._make()
        done()
        assert calls == [(None, None)]

    def test_second_call_raises_and_is_not_forwarded(self):
        done, calls = self._make()
        done()
        with pytest.raises(CompletionAlreadySignalledError) as exc_info:
            done(RuntimeError("late"))
        assert exc_info.value.job_id == "j1"
        assert len(calls) == 1

    def test_not_signalled_initially(self):
        done, _ = self._make()
        assert done.signalled is False
        assert done.job_id == JobId("j1")
        assert "signalled=False" in repr(done)

    def test_concurrent_calls_forward_once(self):
        done, calls = self._make()
        errors: list[Exception] = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            try:
                done(data="x")
            except CompletionAlreadySignalledError as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(calls) == 1
        assert len(errors) == 7
