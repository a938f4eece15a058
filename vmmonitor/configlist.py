"""The list of saved client configurations and the one being edited."""

from __future__ import annotations

import enum
import os
import xml.etree.ElementTree as ET
from pathlib import Path

from vmmonitor.clientconfig import (
    HOST_CID,
    HOST_ID,
    Address,
    ClientConfigModel,
    ClientConfiguration,
    ConnectionStatus,
    UnknownClientError,
)
from vmmonitor.clientdatacontainer import ClientDataContainer
from vmmonitor.flowbuffer import Signal
from vmmonitor.pagenavigator import PageNavigator

_USER_ROLE = 0x0100

MAX_CLIENT_ID = 256
"""Ids below this value are handed out to new configurations."""

NEW_CLIENT_NAME = "New Client"
NEW_CLIENT_PORT = 9000


class ConfigRole(enum.IntEnum):
    ID = _USER_ROLE + 1
    NAME = _USER_ROLE + 2
    IS_REMOTE = _USER_ROLE + 3
    STATUS = _USER_ROLE + 4
    STATUS_MESSAGE = _USER_ROLE + 5


def _lenient_int(text: str) -> int:
    try:
        return int(str(text).strip())
    except ValueError:
        return 0


class ClientConfigListModel:
    """Client configurations persisted to an XML file.

    One configuration is the context, edited through :attr:`context`.
    When the file holds no configuration the host configuration is
    created and saved.
    """

    def __init__(self, path: str | os.PathLike[str], navigator: PageNavigator | None = None) -> None:
        self.path = Path(path)
        self._navigator = navigator
        self._configs: ClientDataContainer[ClientConfigModel] = ClientDataContainer()
        self.context_changed = Signal()
        self.data_changed = Signal()
        self.rows_inserted = Signal()
        self.rows_removed = Signal()
        self.config_connect_clicked = Signal()
        self.delete_config_clicked = Signal()
        self.load_saved_configs()
        if HOST_ID in self._configs:
            source = self._configs.get(HOST_ID)
        else:
            source = ClientConfigModel.host_configuration()
        self._context_model = ClientConfigModel(source.config)

    @property
    def context(self) -> ClientConfigModel:
        """Editable copy of the context configuration."""
        return self._context_model

    def _model(self, client_id: int) -> ClientConfigModel:
        try:
            return self._configs.get(client_id)
        except KeyError:
            raise UnknownClientError(f"no configuration for client {client_id}") from None

    def row_count(self) -> int:
        return len(self._configs)

    def data(self, row: int, role: int) -> object:
        if not 0 <= row < len(self._configs):
            return None
        model = self._configs.at_index(row)
        if role == ConfigRole.ID:
            return model.config.id
        if role == ConfigRole.NAME:
            return model.config.name
        if role == ConfigRole.IS_REMOTE:
            return not model.config.is_host()
        if role == ConfigRole.STATUS:
            return model.connection_status
        if role == ConfigRole.STATUS_MESSAGE:
            return model.connection_status_message
        return None

    def role_names(self) -> dict[int, str]:
        return {
            ConfigRole.ID: "identifier",
            ConfigRole.NAME: "name",
            ConfigRole.IS_REMOTE: "isRemote",
            ConfigRole.STATUS: "status",
            ConfigRole.STATUS_MESSAGE: "statusMessage",
        }

    def search_for_client_config(self, client_id: int) -> ClientConfiguration | None:
        """Configuration of ``client_id``, or None if there is none."""
        if client_id in self._configs:
            return self._configs.get(client_id).config
        return None

    def update_config(self, config: ClientConfiguration) -> None:
        """Replace the context configuration with ``config``."""
        self._configs.context = ClientConfigModel(config)

    def notify_client_status_changed(self, status: ConnectionStatus, client_id: int) -> None:
        """Record a new connection status for ``client_id``."""
        self._model(client_id).update_status(status)
        row = self._configs.index_of(client_id)
        self.data_changed.emit(row, row)

    def delete_config(self, client_id: int) -> None:
        """Remove the configuration of ``client_id`` and save the list."""
        if client_id not in self._configs:
            raise UnknownClientError(f"no configuration for client {client_id}")
        row = self._configs.index_of(client_id)
        self._configs.remove(client_id)
        self.rows_removed.emit(row, row)
        self.data_changed.emit(0, self.row_count() - 1)
        self.context_changed.emit()
        self.save_configs()

    def available_id(self) -> int:
        """Lowest unused id below :data:`MAX_CLIENT_ID`, or that limit itself."""
        return next(
            (candidate for candidate in range(MAX_CLIENT_ID) if candidate not in self._configs),
            MAX_CLIENT_ID,
        )

    def save_configs(self) -> None:
        """Write every configuration to :attr:`path`."""
        root = ET.Element("root")
        for model in self._configs:
            model.save(root)
        ET.ElementTree(root).write(self.path, encoding="utf-8", xml_declaration=True)

    def load_saved_configs(self) -> None:
        """Read configurations from :attr:`path`, creating the host one if none.

        Raises ValueError if the file is not a valid configuration list.
        """
        if self.path.exists():
            content = self.path.read_bytes()
            if content.strip():
                try:
                    root = ET.fromstring(content)
                except ET.ParseError as exc:
                    raise ValueError(f"cannot parse {self.path}: {exc}") from exc
                for element in root:
                    model = ClientConfigModel.load(element)
                    self._configs.append(model.identifier, model)
        if not len(self._configs):
            self._configs.append(HOST_ID, ClientConfigModel.host_configuration())
            self.save_configs()
        self.data_changed.emit(0, self.row_count() - 1)

    def new_config(self) -> ClientConfiguration:
        """Add a fresh configuration, save, and make it the context."""
        config = ClientConfiguration(
            id=self.available_id(),
            name=NEW_CLIENT_NAME,
            address=Address(HOST_CID, NEW_CLIENT_PORT),
        )
        row = self.row_count()
        self._configs.append(config.id, ClientConfigModel(config))
        self.rows_inserted.emit(row, row)
        self.save_configs()
        self.update_context(config.id)
        return config

    def edit_config(self, client_id: int) -> None:
        """Make ``client_id`` the context and open the configuration page."""
        self.update_context(client_id)
        if self._navigator is not None:
            self._navigator.open_client_config_page()

    def save_context(self, name: str, cid: str, port: str) -> None:
        """Store edited values into the context configuration and save.

        Numbers that cannot be parsed become 0.
        """
        model = self._configs.context
        model.name = name
        model.cid = _lenient_int(cid)
        model.port = _lenient_int(port)
        row = self._configs.context_index
        self.data_changed.emit(row, row)
        if self._navigator is not None:
            self._navigator.close_client_config_page()
        self.save_configs()

    def revert_context(self) -> None:
        """Discard edits: close the page and announce the unchanged context."""
        if self._navigator is not None:
            self._navigator.close_client_config_page()
        self.context_changed.emit()

    def update_context(self, client_id: int) -> None:
        """Make ``client_id`` the context and copy it into :attr:`context`."""
        source = self._model(client_id)
        self._configs.set_context(client_id)
        self._context_model.identifier = source.identifier
        self._context_model.name = source.name
        self._context_model.cid = source.cid
        self._context_model.port = source.port
        self.context_changed.emit()