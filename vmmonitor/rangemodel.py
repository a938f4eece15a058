"""Bounded gauge values for CPU, memory and disk usage."""

from __future__ import annotations

from vmmonitor.flowbuffer import Signal


class RangeModel:
    """A value constrained to ``[minimum, maximum]`` with change notification.

    Assigning a value outside the range, or equal to the current one,
    leaves the model unchanged.
    """

    minimum: float = 0.0
    maximum: float = 100.0
    step_size: float = 1.0

    def __init__(self) -> None:
        self._value = 0.0
        self.value_changed = Signal()
        self.activated = Signal()

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, new_value: float) -> None:
        if self.minimum <= new_value <= self.maximum and new_value != self._value:
            self._value = new_value
            self.value_changed.emit(self._value)


class CpuRangeModel(RangeModel):
    """Gauge for overall CPU load."""


class MemoryRangeModel(RangeModel):
    """Gauge for memory usage."""


class DiskRangeModel(RangeModel):
    """Gauge for disk usage."""