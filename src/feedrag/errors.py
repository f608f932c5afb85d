"""Exception types raised by the fee drag estimator."""
from __future__ import annotations


class FeeDragError(Exception):
    """Base class for estimator errors."""


class ConfigurationError(FeeDragError, ValueError):
    """Raised when an investment configuration cannot be projected or solved."""


class RenderTargetMissing(FeeDragError, RuntimeError):
    """Raised when a chart is redrawn without a drawing surface."""


class StaleHoverIndex(FeeDragError, IndexError):
    """Raised when a hover event points outside the current series."""

    def __init__(self, index, length: int) -> None:
        super().__init__(f"Hover index {index!r} outside series of length {length}")
        self.index = index
        self.length = length


__all__ = [
    "ConfigurationError",
    "FeeDragError",
    "RenderTargetMissing",
    "StaleHoverIndex",
]
