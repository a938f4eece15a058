"""Network interfaces of every client with rx/tx histories."""

from __future__ import annotations

import copy
import enum
from collections.abc import Iterable
from typing import Any

from vmmonitor.clientconfig import HOST_ID, UnknownClientError
from vmmonitor.flowbuffer import FlowBuffer, Signal
from vmmonitor.lineargraph import LinearGraphDataModel, new_graph_data

_USER_ROLE = 0x0100


class NetworkLoadDataModel(LinearGraphDataModel):
    """Graph of one direction of traffic on one interface."""

    def __init__(self, data: FlowBuffer) -> None:
        super().__init__(data)
        self.max_value = 500
        self.max_value_changed = Signal()


class NetworkLoadData:
    """Received and transmitted byte histories of one interface."""

    def __init__(self) -> None:
        self.rx_bytes = new_graph_data()
        self.tx_bytes = new_graph_data()

    def push(self, rx: float, tx: float) -> None:
        self.rx_bytes.push(rx)
        self.tx_bytes.push(tx)


class NetworkInterfaceData:
    """Latest figures of one interface together with its history.

    ``info`` needs ``name``, ``rx_bytes`` and ``tx_bytes`` attributes; it
    is copied, so the caller's record is never changed.
    """

    def __init__(self, info: Any) -> None:
        self.info = copy.copy(info)
        self.load_data = NetworkLoadData()

    def update(self, rx: float, tx: float) -> None:
        """Record new byte counts."""
        self.load_data.push(rx, tx)
        self.info.rx_bytes = rx
        self.info.tx_bytes = tx


class ClientNetworkInfo:
    """All interfaces of one client, in the order they were first seen."""

    def __init__(self) -> None:
        self.datas: list[NetworkInterfaceData] = []
        self.overall_rx = 0
        self.overall_tx = 0

    def update(self, interfaces: Iterable[Any]) -> None:
        """Take new interface figures; unknown interfaces are added."""
        interfaces = list(interfaces)
        self.overall_rx = sum(interface.rx_bytes for interface in interfaces)
        self.overall_tx = sum(interface.tx_bytes for interface in interfaces)
        known = {data.info.name: data for data in self.datas}
        for interface in interfaces:
            existing = known.get(interface.name)
            if existing is None:
                data = NetworkInterfaceData(interface)
                self.datas.append(data)
                known[interface.name] = data
            else:
                existing.update(interface.rx_bytes, interface.tx_bytes)

    def info(self, index: int) -> Any:
        """Latest record of the interface at ``index``."""
        if index < 0:
            raise IndexError("interface index out of range")
        return self.datas[index].info


class NetworkRole(enum.IntEnum):
    NAME = _USER_ROLE + 1
    TYPE = _USER_ROLE + 2
    RX_VALUE = _USER_ROLE + 3
    TX_VALUE = _USER_ROLE + 4
    RX_DATA_MODEL = _USER_ROLE + 5
    TX_DATA_MODEL = _USER_ROLE + 6


def _number_text(value: Any) -> str:
    if isinstance(value, int):
        return str(value)
    return format(value, ".6g")


class NetworkInterfaceModel:
    """List of the context client's interfaces with graph models per row.

    Interface records also need a ``type_as_str()`` method.
    """

    def __init__(self) -> None:
        self._rx_models: list[NetworkLoadDataModel] = []
        self._tx_models: list[NetworkLoadDataModel] = []
        self._network_infos: dict[int, ClientNetworkInfo] = {}
        self.context = HOST_ID
        self.data_changed = Signal()
        self.rows_removed = Signal()
        self.rows_inserted = Signal()
        self.overall_rx_changed = Signal()
        self.overall_tx_changed = Signal()

    def _context_info(self) -> ClientNetworkInfo:
        try:
            return self._network_infos[self.context]
        except KeyError:
            raise UnknownClientError(f"no network data for client {self.context}") from None

    def row_count(self) -> int:
        if not self._network_infos:
            return 0
        return len(self._rx_models)

    def data(self, row: int, role: int) -> object:
        if not 0 <= row < self.row_count():
            return None
        info = self._context_info().info(row)
        if role == NetworkRole.NAME:
            return info.name
        if role == NetworkRole.TYPE:
            return info.type_as_str()
        if role == NetworkRole.RX_VALUE:
            return _number_text(info.rx_bytes)
        if role == NetworkRole.TX_VALUE:
            return _number_text(info.tx_bytes)
        if role == NetworkRole.RX_DATA_MODEL:
            return self._rx_models[row]
        if role == NetworkRole.TX_DATA_MODEL:
            return self._tx_models[row]
        return None

    def role_names(self) -> dict[int, str]:
        return {
            NetworkRole.NAME: "name",
            NetworkRole.TYPE: "type",
            NetworkRole.RX_VALUE: "rxValue",
            NetworkRole.TX_VALUE: "txValue",
            NetworkRole.RX_DATA_MODEL: "rxDataModel",
            NetworkRole.TX_DATA_MODEL: "txDataModel",
        }

    @property
    def overall_rx(self) -> int:
        return self._context_info().overall_rx

    @property
    def overall_tx(self) -> int:
        return self._context_info().overall_tx

    def update_interfaces(self, client_id: int, interfaces: Iterable[Any]) -> None:
        """Record new interface figures of ``client_id``."""
        self._network_infos.setdefault(client_id, ClientNetworkInfo()).update(interfaces)
        if client_id == self.context:
            self._refresh_view()

    def append(self, client_id: int) -> None:
        """Start tracking ``client_id`` with no interfaces."""
        self._network_infos.setdefault(client_id, ClientNetworkInfo())

    def remove(self, client_id: int) -> None:
        """Forget ``client_id``; the host is shown if it was in context."""
        if client_id == self.context:
            self.set_context(HOST_ID)
        self._network_infos.pop(client_id, None)

    def set_context(self, client_id: int) -> None:
        """Show the interfaces of ``client_id``."""
        self.context = client_id
        self._refresh_view()

    def _refresh_view(self) -> None:
        datas = self._context_info().datas
        new_count = len(datas)
        old_count = len(self._rx_models)
        if new_count < old_count:
            for model in self._rx_models[new_count:] + self._tx_models[new_count:]:
                model._detach()
            del self._rx_models[new_count:]
            del self._tx_models[new_count:]
            self.rows_removed.emit(new_count, old_count - 1)
        kept = min(old_count, new_count)
        for rx_model, tx_model, data in zip(self._rx_models[:kept], self._tx_models[:kept], datas):
            rx_model.set_data_provider(data.load_data.rx_bytes)
            tx_model.set_data_provider(data.load_data.tx_bytes)
        if new_count > old_count:
            for data in datas[old_count:]:
                self._rx_models.append(NetworkLoadDataModel(data.load_data.rx_bytes))
                self._tx_models.append(NetworkLoadDataModel(data.load_data.tx_bytes))
            self.rows_inserted.emit(old_count, new_count - 1)
        self.data_changed.emit(0, self.row_count() - 1)
        self.overall_tx_changed.emit()
        self.overall_rx_changed.emit()