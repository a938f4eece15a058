"""Static description of the client currently in context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vmmonitor.clientconfig import UnknownClientError
from vmmonitor.clientdatacontainer import ClientDataContainer
from vmmonitor.flowbuffer import Signal

_FIELDS = ("platform", "distribution", "cpu_cores", "cpu_model", "cpu_speed", "name")


@dataclass
class ClientDescriptionInfo:
    """Display name of a client and its system information.

    ``info`` needs ``platform``, ``distribution`` and ``cpu_info``
    attributes; ``cpu_info`` needs ``model``, ``cores`` and ``speed``.
    """

    name: str
    info: Any


class ClientDescriptionModel:
    """Descriptions of every client, exposing the context client's.

    :attr:`changed` emits each field name when the shown data changes.
    """

    def __init__(self) -> None:
        self._infos: ClientDataContainer[ClientDescriptionInfo] = ClientDataContainer()
        self.changed = Signal()

    def _current(self) -> ClientDescriptionInfo:
        try:
            return self._infos.context
        except KeyError:
            raise UnknownClientError(
                f"no description for client {self._infos.context_client}"
            ) from None

    @property
    def context(self) -> int:
        return self._infos.context_client

    @property
    def name(self) -> str:
        return self._current().name

    @property
    def platform(self) -> str:
        return self._current().info.platform

    @property
    def distribution(self) -> str:
        return self._current().info.distribution

    @property
    def cpu_model(self) -> str:
        return self._current().info.cpu_info.model

    @property
    def cpu_cores(self) -> int:
        return self._current().info.cpu_info.cores

    @property
    def cpu_speed(self) -> str:
        return self._current().info.cpu_info.speed

    def append(self, client_id: int, info: ClientDescriptionInfo) -> None:
        self._infos.append(client_id, info)

    def remove(self, client_id: int) -> None:
        """Forget ``client_id``; the host is shown if it was in context."""
        if client_id not in self._infos:
            raise UnknownClientError(f"no description for client {client_id}")
        was_context = client_id == self._infos.context_client
        self._infos.remove(client_id)
        if was_context:
            self._emit_changed()

    def update(self, client_id: int, info: ClientDescriptionInfo) -> None:
        """Replace the description of ``client_id``."""
        if client_id not in self._infos:
            raise UnknownClientError(f"no description for client {client_id}")
        self._infos.set(client_id, info)
        if client_id == self._infos.context_client:
            self._emit_changed()

    def set_context(self, client_id: int) -> None:
        """Show the description of ``client_id``."""
        self._infos.set_context(client_id)
        self._emit_changed()

    def _emit_changed(self) -> None:
        for field_name in _FIELDS:
            self.changed.emit(field_name)