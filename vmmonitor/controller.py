"""Connection handling between the configuration list and the view."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from vmmonitor.clientconfig import (
    HOST_ID,
    ClientConfiguration,
    ConnectionState,
    ConnectionStatus,
    UnknownClientError,
)
from vmmonitor.connector import DEFAULT_TIMEOUT, ClientConnector, ClientDispatcher, Connection
from vmmonitor.viewcontroller import ClientViewController

_log = logging.getLogger(__name__)

DispatcherFactory = Callable[[ClientConfiguration, bool], ClientDispatcher]
"""Builds a dispatcher for a configuration; the flag is True for the local host."""


class Controller:
    """Connects clients on request and keeps one view controller per client."""

    def __init__(
        self,
        app: Any,
        dispatcher_factory: DispatcherFactory,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._app = app
        self._dispatcher_factory = dispatcher_factory
        self._clients: dict[int, ClientViewController] = {}
        self.connector = ClientConnector(timeout)
        self.connector.client_connected.connect(self.on_client_connection_success)
        self.connector.client_timed_out.connect(self.on_client_connection_failed)

    def start_execution(self) -> None:
        """Start connecting to the local host client."""
        config = self._app.get_client_config(HOST_ID)
        self.connector.add_dispatcher(self._dispatcher_factory(config, True))

    def set_client_into_context(self, client_id: int) -> None:
        """Show ``client_id`` in the view; unknown clients are ignored."""
        try:
            client = self.view_controller(client_id)
        except UnknownClientError:
            _log.debug("cannot open client overview: no client %s", client_id)
            return
        client.set_context()
        self._app.navigator.register_context(client_id)

    def on_client_connection_success(self, status: ConnectionStatus, connection: Connection) -> None:
        """Register a client that reported in."""
        client_id = connection.dispatcher.id
        self._app.config_model.notify_client_status_changed(status, client_id)
        if client_id in self._clients:
            return
        view_controller = ClientViewController(self._app, connection)
        view_controller.timed_out.connect(self.on_connected_client_timed_out)
        self._clients[client_id] = view_controller

    def on_client_connection_failed(self, status: ConnectionStatus, client_id: int) -> None:
        """Record that ``client_id`` could not be connected."""
        self._app.config_model.notify_client_status_changed(status, client_id)

    def on_connected_client_timed_out(self, client_id: int) -> None:
        """Drop a connected client that went silent."""
        self._remove_client(client_id, ConnectionStatus(ConnectionState.TIMED_OUT, "Timed out"))
        _log.debug("client timed out - %s", client_id)

    def _remove_client(self, client_id: int, status: ConnectionStatus) -> None:
        view_controller = self.view_controller(client_id)
        self._app.config_model.notify_client_status_changed(status, client_id)
        self._app.navigator.register_context(HOST_ID)
        del self._clients[client_id]
        view_controller.close()

    def handle_connection(self, client_id: int) -> None:
        """Try to connect to the remote client ``client_id``.

        Connected or pending clients, unknown ids and failing dispatchers
        are ignored.
        """
        if client_id in self._clients or self.connector.is_pending(client_id):
            return
        try:
            config = self._app.get_client_config(client_id)
            self.connector.add_dispatcher(self._dispatcher_factory(config, False))
        except ConnectionError as exc:
            _log.debug("cannot connect to client %s: %s", client_id, exc)
        except UnknownClientError:
            _log.debug("cannot connect: no configuration for client %s", client_id)

    def handle_config_delete(self, client_id: int) -> bool:
        """Delete the configuration of a client that is not connected.

        Returns False, leaving the configuration in place, if it is connected.
        """
        if client_id not in self._clients:
            self._app.config_model.delete_config(client_id)
            return True
        _log.debug(
            "cannot remove config: client is connected: %s",
            self._app.get_client_config(client_id).name,
        )
        return False

    def handle_disconnect_request(self, client_id: int) -> None:
        """Disconnect ``client_id``; the host cannot be disconnected."""
        if client_id == HOST_ID:
            return
        self._remove_client(
            client_id, ConnectionStatus(ConnectionState.IDLE, "Disconnected from client")
        )

    def view_controller(self, client_id: int) -> ClientViewController:
        """View controller of a connected client; raises UnknownClientError."""
        try:
            return self._clients[client_id]
        except KeyError:
            raise UnknownClientError(f"client {client_id} is not connected") from None