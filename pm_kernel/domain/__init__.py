"""Pure domain helpers with no database or I/O dependencies."""

from pm_kernel.domain.clock import Clock, DeterministicClock, SystemClock

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
]
