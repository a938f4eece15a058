"""Fixed-size rolling buffer of samples with change notification."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any


class Signal:
    """A minimal observer list: connected slots are called on emit."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        """Register ``slot`` to be called on every emit."""
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove a previously connected ``slot``; unknown slots are ignored."""
        try:
            self._slots.remove(slot)
        except ValueError:
            pass

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``."""
        for slot in list(self._slots):
            slot(*args)


class FlowBuffer:
    """Ring buffer of ``size`` floats, indexed from oldest to newest sample.

    All slots start at zero. Each push overwrites the oldest sample and
    emits :attr:`changed`.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self._values: list[float] = [0.0] * size
        self._offset = 0
        self.changed = Signal()

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> float:
        size = len(self._values)
        if not -size <= index < size:
            raise IndexError("flow buffer index out of range")
        if index < 0:
            index += size
        return self._values[(index + self._offset) % size]

    def __iter__(self) -> Iterator[float]:
        size = len(self._values)
        for step in range(size):
            yield self._values[(step + self._offset) % size]

    def push(self, value: float) -> None:
        """Append ``value`` as the newest sample, dropping the oldest."""
        self._values[self._offset] = float(value)
        self._offset = (self._offset + 1) % len(self._values)
        self.changed.emit()