"""Tracking of client connections until they report in or time out."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from vmmonitor.clientconfig import (
    ClientConfiguration,
    ConnectionState,
    ConnectionStatus,
    UnknownClientError,
)
from vmmonitor.flowbuffer import Signal

DEFAULT_TIMEOUT = 0.1
"""Seconds to wait for pending clients before they time out."""


class ClientDispatcher:
    """Communication endpoint of one client.

    Emits :attr:`client_connected` with the client's system information,
    :attr:`runtime_metric_received` with each metric, and
    :attr:`client_timed_out` when the client goes silent.
    """

    def __init__(self, config: ClientConfiguration) -> None:
        self.config = config
        self.runtime_metric_received = Signal()
        self.client_connected = Signal()
        self.client_timed_out = Signal()

    @property
    def id(self) -> int:
        return self.config.id

    @property
    def name(self) -> str:
        return self.config.name


@dataclass
class Connection:
    """A dispatcher that reported in, with the system information it sent."""

    dispatcher: ClientDispatcher
    system_info: Any


class ClientConnector:
    """Waits for dispatchers to report in.

    Each added dispatcher restarts a single-shot timer; when it fires,
    every dispatcher still pending is reported through
    :attr:`client_timed_out`. A ``timeout`` of None disables the timer,
    leaving :meth:`resolve_clients` to be called explicitly.
    """

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout
        self.client_connected = Signal()
        self.client_timed_out = Signal()
        self._pending: dict[int, tuple[ClientDispatcher, Callable[[Any], None]]] = {}
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def add_dispatcher(self, dispatcher: ClientDispatcher) -> bool:
        """Start waiting for ``dispatcher``; False if its client is already pending."""
        client_id = dispatcher.id

        def slot(system_info: Any) -> None:
            self.on_client_connected(client_id, system_info)

        with self._lock:
            if client_id in self._pending:
                return False
            self._pending[client_id] = (dispatcher, slot)
            dispatcher.client_connected.connect(slot)
            self._restart_timer()
        return True

    def _restart_timer(self) -> None:
        if self.timeout is None:
            return
        if self._timer is not None:
            self._timer.cancel()
        self._timer = threading.Timer(self.timeout, self.resolve_clients)
        self._timer.daemon = True
        self._timer.start()

    def resolve_clients(self) -> None:
        """Report every pending client as timed out and stop waiting for them."""
        with self._lock:
            pending = list(self._pending.items())
            self._pending.clear()
        for client_id, (dispatcher, slot) in pending:
            dispatcher.client_connected.disconnect(slot)
            self.client_timed_out.emit(
                ConnectionStatus(ConnectionState.TIMED_OUT, "Timed out"), client_id
            )

    def on_client_connected(self, client_id: int, system_info: Any) -> None:
        """Resolve ``client_id`` as connected; raises UnknownClientError if not pending."""
        with self._lock:
            try:
                dispatcher, slot = self._pending.pop(client_id)
            except KeyError:
                raise UnknownClientError(f"client {client_id} is not pending") from None
        dispatcher.client_connected.disconnect(slot)
        self.client_connected.emit(ConnectionStatus(), Connection(dispatcher, system_info))

    def is_pending(self, client_id: int) -> bool:
        """True while ``client_id`` has neither connected nor timed out."""
        with self._lock:
            return client_id in self._pending