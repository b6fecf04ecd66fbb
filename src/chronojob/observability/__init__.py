"""Observability – structured logging for the scheduler."""

from chronojob.observability.logging import (
    Logger,
    NoopLogger,
    configure_logging,
    get_logger,
)

__all__ = ["Logger", "NoopLogger", "configure_logging", "get_logger"]
