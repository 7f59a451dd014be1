"""Selectors for the pulse kernel (read side)."""

from pulse_kernel.selectors.base import BaseSelector

__all__ = [
    "BaseSelector",
]
