"""Observability – NoopLogger."""
from __future__ import annotations

from typing import Any


class NoopLogger:
    """Silent logger used when no logger is injected."""

    def debug(self, event: str, **kw: Any) -> None:
        pass

    def info(self, event: str, **kw: Any) -> None:
        pass

    def warning(self, event: str, **kw: Any) -> None:
        pass

    def error(self, event: str, **kw: Any) -> None:
        pass

    def critical(self, event: str, **kw: Any) -> None:
        pass

    def bind(self, **kw: Any) -> "NoopLogger":  # noqa: ARG002
        return self


__all__ = ["NoopLogger"]
