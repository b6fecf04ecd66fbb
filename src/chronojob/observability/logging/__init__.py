"""Observability – structured logging ports and helpers."""
from chronojob.observability.logging.protocol import Logger
from chronojob.observability.logging.noop import NoopLogger
from chronojob.observability.logging.factory import configure_logging
from chronojob.observability.logging.processors import get_logger

__all__ = ["Logger", "NoopLogger", "configure_logging", "get_logger"]
