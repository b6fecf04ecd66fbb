"""Kernel types – identifier value objects."""
from chronojob.kernel.types.ids import JobId

__all__ = ["JobId"]
