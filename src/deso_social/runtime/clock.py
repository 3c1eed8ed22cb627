"""
Clock capability for timestamped metadata.

Posts and new messages carry a wall-clock timestamp in nanoseconds. Builders
take a Clock instead of reading the system time so tests can pin it.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import time


class Clock(ABC):
    """Source of wall-clock time."""

    @abstractmethod
    def now_nanos(self) -> int:
        """Current Unix time in integer nanoseconds."""
        pass


class SystemClock(Clock):
    """Reads the platform's highest-resolution wall clock."""

    def now_nanos(self) -> int:
        return time.time_ns()


class FixedClock(Clock):
    """Always returns the same instant; optional step advances it per call."""

    def __init__(self, nanos: int, step: int = 0):
        self._nanos = nanos
        self._step = step

    def now_nanos(self) -> int:
        value = self._nanos
        self._nanos += self._step
        return value


__all__ = ["Clock", "SystemClock", "FixedClock"]
