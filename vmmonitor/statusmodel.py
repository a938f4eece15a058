"""List of connected clients with their latest CPU and memory load."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from vmmonitor.clientdatacontainer import ClientDataContainer
from vmmonitor.flowbuffer import Signal

_USER_ROLE = 0x0100


@dataclass
class StatusEntry:
    """One row of the status list."""

    id: int
    name: str
    cpu: float
    memory: float


class StatusRole(enum.IntEnum):
    ID = _USER_ROLE + 1
    NAME = _USER_ROLE + 2
    CPU = _USER_ROLE + 3
    MEMORY = _USER_ROLE + 4


_ROLE_ATTRIBUTES = {
    StatusRole.ID: "id",
    StatusRole.NAME: "name",
    StatusRole.CPU: "cpu",
    StatusRole.MEMORY: "memory",
}


class ClientStatusModel:
    """Rows of :class:`StatusEntry`, one per client, in connection order."""

    def __init__(self) -> None:
        self._entries: ClientDataContainer[StatusEntry] = ClientDataContainer()
        self.item_triggered = Signal()
        self.data_changed = Signal()
        self.rows_inserted = Signal()
        self.rows_removed = Signal()

    def row_count(self) -> int:
        return len(self._entries)

    def data(self, row: int, role: int) -> object:
        if not 0 <= row < len(self._entries):
            return None
        attribute = _ROLE_ATTRIBUTES.get(role)
        if attribute is None:
            return None
        return getattr(self._entries.at_index(row), attribute)

    def role_names(self) -> dict[int, str]:
        return {
            StatusRole.ID: "clientId",
            StatusRole.NAME: "name",
            StatusRole.CPU: "cpu",
            StatusRole.MEMORY: "memory",
        }

    def add(self, entry: StatusEntry) -> None:
        row = self.row_count()
        self._entries.append(entry.id, entry)
        self.rows_inserted.emit(row, row)

    def remove(self, client_id: int) -> None:
        row = self._entries.index_of(client_id)
        self._entries.remove(client_id)
        self.rows_removed.emit(row, row)

    def update(self, client_id: int, entry: StatusEntry) -> None:
        self._entries.set(client_id, entry)
        self._notify(client_id)

    def update_rt_values(self, client_id: int, cpu: float, memory: float) -> None:
        """Replace the load figures of ``client_id``."""
        entry = self._entries.get(client_id)
        entry.cpu = cpu
        entry.memory = memory
        self._notify(client_id)

    def _notify(self, client_id: int) -> None:
        row = self._entries.index_of(client_id)
        self.data_changed.emit(row, row)