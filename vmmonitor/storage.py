"""Storage devices of every client and the memory/disk gauges."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Any

from vmmonitor.clientconfig import HOST_ID, UnknownClientError
from vmmonitor.flowbuffer import Signal
from vmmonitor.rangemodel import RangeModel

_DISPLAY_ROLE = 0


class StorageRole(enum.IntEnum):
    NAME = _DISPLAY_ROLE + 1
    FS_TYPE = _DISPLAY_ROLE + 2
    DEVICE = _DISPLAY_ROLE + 3
    TOTAL_BYTES = _DISPLAY_ROLE + 4
    FREE_BYTES = _DISPLAY_ROLE + 5
    USED_PERCENT = _DISPLAY_ROLE + 6


_ROLE_ATTRIBUTES = {
    StorageRole.NAME: "name",
    StorageRole.FS_TYPE: "file_system_type",
    StorageRole.DEVICE: "device",
    StorageRole.TOTAL_BYTES: "mbytes_total",
    StorageRole.FREE_BYTES: "mbytes_free",
    StorageRole.USED_PERCENT: "used_percent",
}


class StorageDataModel:
    """List of the context client's storage devices.

    Device records need ``name``, ``file_system_type``, ``device``,
    ``mbytes_total``, ``mbytes_free`` and ``used_percent`` attributes.
    :attr:`data_changed` emits ``(first_row, last_row)``.
    """

    def __init__(self, memory_range: RangeModel, disk_range: RangeModel) -> None:
        self._memory_range = memory_range
        self._disk_range = disk_range
        self._infos: dict[int, list[Any]] = {}
        self.context = HOST_ID
        self.data_changed = Signal()

    def _context_devices(self) -> list[Any]:
        try:
            return self._infos[self.context]
        except KeyError:
            raise UnknownClientError(f"no storage data for client {self.context}") from None

    def row_count(self) -> int:
        if not self._infos:
            return 0
        return len(self._context_devices())

    def data(self, row: int, role: int) -> object:
        attribute = _ROLE_ATTRIBUTES.get(role)
        devices = self._context_devices()
        if attribute is None or not 0 <= row < len(devices):
            return None
        return getattr(devices[row], attribute)

    def role_names(self) -> dict[int, str]:
        return {
            StorageRole.NAME: "name",
            StorageRole.FS_TYPE: "fileFsType",
            StorageRole.DEVICE: "device",
            StorageRole.TOTAL_BYTES: "bytesTotal",
            StorageRole.FREE_BYTES: "bytesFree",
            StorageRole.USED_PERCENT: "usedPercent",
        }

    def update_loads(self, client_id: int, memory_load: float, disk_load: float) -> None:
        """Drive the gauges if ``client_id`` is in context."""
        if client_id != self.context:
            return
        self._memory_range.value = memory_load
        self._disk_range.value = disk_load

    def update_devices(self, client_id: int, devices: Iterable[Any]) -> None:
        """Replace the device list of ``client_id``."""
        self._infos[client_id] = list(devices)
        if client_id == self.context:
            self._refresh_view()

    def append(self, client_id: int) -> None:
        """Start tracking ``client_id`` with no devices."""
        self._infos.setdefault(client_id, [])

    def remove(self, client_id: int) -> None:
        """Forget ``client_id``; the host is shown if it was in context."""
        if client_id == self.context:
            self.set_context(HOST_ID)
        self._infos.pop(client_id, None)

    def set_context(self, client_id: int) -> None:
        """Show the devices of ``client_id``."""
        self.context = client_id
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.data_changed.emit(0, self.row_count() - 1)