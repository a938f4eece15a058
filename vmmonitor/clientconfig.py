"""Client configurations, connection status and their XML persistence."""

from __future__ import annotations

import enum
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from vmmonitor.flowbuffer import Signal

HOST_ID = 0
"""Identifier reserved for the monitoring host itself."""

HOST_CID = 2
"""Well-known vsock context id of the host."""


class UnknownClientError(LookupError):
    """Raised when a client id has no known configuration or connection."""


@dataclass
class Address:
    """A vsock address: context id and port."""

    cid: int
    port: int


@dataclass
class ClientConfiguration:
    """Identity and address of one monitored client."""

    id: int
    name: str
    address: Address

    def is_host(self) -> bool:
        """True when this configuration describes the host machine."""
        return self.id == HOST_ID


class ConnectionState(enum.IntEnum):
    IDLE = 0
    ALIVE = 1
    TIMED_OUT = 2
    REFUSED = 3


@dataclass
class ConnectionStatus:
    """Outcome of a connection attempt, with a human readable message."""

    state: ConnectionState = ConnectionState.IDLE
    message: str = ""


def _to_int(text: str | None) -> int:
    try:
        return int((text or "").strip())
    except ValueError:
        return 0


class ClientConfigModel:
    """Editable view of a client configuration plus its connection status.

    Changing a field to a different value emits :attr:`changed` with the
    field name; status updates emit ``"connection_status"``.
    """

    def __init__(self, config: ClientConfiguration) -> None:
        self.config = ClientConfiguration(
            config.id, config.name, Address(config.address.cid, config.address.port)
        )
        self.connection_status = ConnectionState.IDLE
        self.connection_status_message = ""
        self.changed = Signal()

    def _assign(self, attribute: str, target: object, value: object) -> None:
        if getattr(target, attribute) == value:
            return
        setattr(target, attribute, value)
        self.changed.emit(attribute)

    @property
    def name(self) -> str:
        return self.config.name

    @name.setter
    def name(self, value: str) -> None:
        self._assign("name", self.config, value)

    @property
    def identifier(self) -> int:
        return self.config.id

    @identifier.setter
    def identifier(self, value: int) -> None:
        if value != self.config.id:
            self.config.id = value
            self.changed.emit("identifier")

    @property
    def cid(self) -> int:
        return self.config.address.cid

    @cid.setter
    def cid(self, value: int) -> None:
        self._assign("cid", self.config.address, value)

    @property
    def port(self) -> int:
        return self.config.address.port

    @port.setter
    def port(self, value: int) -> None:
        self._assign("port", self.config.address, value)

    @property
    def is_remote(self) -> bool:
        return not self.config.is_host()

    def update_status(self, status: ConnectionStatus) -> None:
        """Record a new connection status and notify listeners."""
        self.connection_status = ConnectionState(status.state)
        self.connection_status_message = status.message
        self.changed.emit("connection_status_message")
        self.changed.emit("connection_status")

    def save(self, parent: ET.Element) -> ET.Element:
        """Append a ``client_config`` element describing this client to ``parent``."""
        element = ET.SubElement(parent, "client_config")
        for tag, value in (
            ("id", str(self.config.id)),
            ("name", self.config.name),
            ("cid", str(self.config.address.cid)),
            ("port", str(self.config.address.port)),
        ):
            ET.SubElement(element, tag).text = value
        return element

    @classmethod
    def load(cls, element: ET.Element) -> "ClientConfigModel":
        """Build a model from a ``client_config`` element.

        Raises ValueError when the children are not id, name, cid, port.
        """
        children = list(element)
        expected = ("id", "name", "cid", "port")
        for position, tag in enumerate(expected):
            if position >= len(children) or children[position].tag != tag:
                raise ValueError(f"malformed client configuration: expected <{tag}>")
        id_node, name_node, cid_node, port_node = children[:4]
        return cls(
            ClientConfiguration(
                id=_to_int(id_node.text),
                name=name_node.text or "",
                address=Address(_to_int(cid_node.text), _to_int(port_node.text)),
            )
        )

    @classmethod
    def host_configuration(cls) -> "ClientConfigModel":
        """The default configuration of the host client."""
        return cls(ClientConfiguration(HOST_ID, "Host", Address(HOST_CID, 9999)))

    def __repr__(self) -> str:
        return (
            f"ClientConfigModel({self.config!r}, status={self.connection_status.name})"
        )


__all__ = [
    "HOST_ID",
    "HOST_CID",
    "UnknownClientError",
    "Address",
    "ClientConfiguration",
    "ConnectionState",
    "ConnectionStatus",
    "ClientConfigModel",
    "field",
]