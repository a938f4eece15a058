"""Process table rows and a sortable view over them."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from vmmonitor.flowbuffer import Signal


class ProcessField(enum.IntEnum):
    PID = 0
    STATUS = 1
    CPU = 2
    MEMORY = 3
    EXECUTABLE = 4
    ARGS = 5


FIELD_COUNT = len(ProcessField)

_FIELD_ATTRIBUTES = {
    ProcessField.PID: "pid",
    ProcessField.STATUS: "status",
    ProcessField.CPU: "cpu_usage",
    ProcessField.MEMORY: "memory_usage",
    ProcessField.EXECUTABLE: "executable",
    ProcessField.ARGS: "args",
}


@dataclass
class ProcessEntry:
    """One process as displayed in the table."""

    pid: int = 0
    status: str = ""
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    executable: str = ""
    args: str = ""

    @classmethod
    def from_info(cls, info: Any) -> "ProcessEntry":
        """Build an entry from a process metric record.

        ``info`` needs ``pid``, ``status``, ``processor_usage``,
        ``memory_percent``, ``executable`` and ``args`` attributes.
        """
        return cls(
            pid=info.pid,
            status=str(info.status),
            cpu_usage=info.processor_usage,
            memory_usage=info.memory_percent,
            executable=cls.crop_executable(info.executable),
            args=info.args,
        )

    @staticmethod
    def crop_executable(executable: str) -> str:
        """Last path component, with its parent directory if the name is short."""
        parts = executable.split("/")
        if len(parts[-1]) < 10 and len(parts) >= 2:
            return parts[-2] + "/" + parts[-1]
        return parts[-1]

    def sort_key(self, field: ProcessField) -> Any:
        return getattr(self, _FIELD_ATTRIBUTES[field])


class ProcessIndexer:
    """Entries viewed in stable sorted order by one field, up or down.

    :attr:`data_changed` is emitted after every update or re-sort.
    """

    def __init__(self, sort_field: ProcessField = ProcessField.EXECUTABLE) -> None:
        self._entries: list[ProcessEntry] = []
        self._order: list[int] = []
        self._sorted_by = ProcessField(sort_field)
        self._ascending = True
        self.data_changed = Signal()

    @property
    def sorted_by(self) -> ProcessField:
        return self._sorted_by

    @property
    def ascending(self) -> bool:
        return self._ascending

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> ProcessEntry:
        size = len(self._order)
        if not 0 <= index < size:
            raise IndexError("process index out of range")
        position = index if self._ascending else size - 1 - index
        return self._entries[self._order[position]]

    def update(self, entries: Iterable[ProcessEntry]) -> None:
        """Replace all entries and re-sort them."""
        self._entries = list(entries)
        self._order = list(range(len(self._entries)))
        self._sort()
        self.data_changed.emit()

    def set_sort_property(self, field: ProcessField, ascending: bool = True) -> None:
        """Sort by ``field``, ascending or descending."""
        self._ascending = ascending
        self._sorted_by = ProcessField(field)
        self._sort()
        self.data_changed.emit()

    def _sort(self) -> None:
        entries = self._entries
        field = self._sorted_by
        self._order.sort(key=lambda i: entries[i].sort_key(field))