"""Binds one connected client to the shared view models."""

from __future__ import annotations

import logging
from typing import Any

from vmmonitor.clientconfig import HOST_ID
from vmmonitor.connector import Connection
from vmmonitor.description import ClientDescriptionInfo
from vmmonitor.flowbuffer import Signal
from vmmonitor.processes import ProcessEntry
from vmmonitor.statusmodel import StatusEntry

_log = logging.getLogger(__name__)


class ClientViewController:
    """Feeds the metrics of one connected client into the application's models.

    On creation the client is registered with every per-client model. Each
    runtime metric the dispatcher delivers updates them. :attr:`timed_out`
    emits the client id when the dispatcher reports a timeout.

    Runtime metrics need ``processes``, ``core_loads``, ``storage_info``
    and ``network_info`` attributes, ``overall_cpu_load()`` and
    ``overall_storage_load()`` methods, and a ``memory`` attribute with a
    ``used_percent()`` method.
    """

    def __init__(self, app: Any, connection: Connection) -> None:
        self._app = app
        self.connection = connection
        self.timed_out = Signal()
        self._closed = False

        config = app.get_client_config(connection.dispatcher.id)
        system_info = connection.system_info

        dispatcher = connection.dispatcher
        dispatcher.runtime_metric_received.connect(self.on_runtime_metric_received)
        dispatcher.client_timed_out.connect(self._on_timed_out)

        app.cpu_load_model.append(config.id, system_info.cpu_info.cores)
        app.storage_device_model.append(config.id)
        app.network_interface_model.append(config.id)
        app.process_table.append(config.id)
        app.client_descriptor.append(config.id, ClientDescriptionInfo(config.name, system_info))
        app.status_model.add(StatusEntry(config.id, config.name, 0.0, 0.0))

    @property
    def id(self) -> int:
        """Id of the client this controller serves."""
        return self.connection.dispatcher.id

    def _on_timed_out(self) -> None:
        self.timed_out.emit(self.id)

    def set_context(self) -> None:
        """Show this client in every model and open its overview page."""
        client_id = self.id
        app = self._app
        app.cpu_load_model.set_context(client_id)
        app.storage_device_model.set_context(client_id)
        app.network_interface_model.set_context(client_id)
        app.process_table.set_context(client_id)
        app.client_descriptor.set_context(client_id)
        app.navigator.show_client_overview_page(client_id)

    def close(self) -> None:
        """Stop listening to the dispatcher and unregister the client.

        The host stays registered with the models.
        """
        if self._closed:
            return
        self._closed = True
        dispatcher = self.connection.dispatcher
        dispatcher.runtime_metric_received.disconnect(self.on_runtime_metric_received)
        dispatcher.client_timed_out.disconnect(self._on_timed_out)
        client_id = self.id
        if client_id == HOST_ID:
            return
        app = self._app
        app.cpu_load_model.remove(client_id)
        app.storage_device_model.remove(client_id)
        app.client_descriptor.remove(client_id)
        app.network_interface_model.remove(client_id)
        app.process_table.remove(client_id)
        app.status_model.remove(client_id)
        _log.debug("client %s unregistered from the view", client_id)

    def on_runtime_metric_received(self, metric: Any) -> None:
        """Distribute one runtime metric over the models."""
        entries = [ProcessEntry.from_info(process) for process in metric.processes]
        client_id = self.id
        cpu = metric.overall_cpu_load()
        memory = metric.memory.used_percent()
        app = self._app
        app.cpu_load_model.update_loads(client_id, cpu, metric.core_loads)
        app.storage_device_model.update_loads(client_id, memory, metric.overall_storage_load())
        app.storage_device_model.update_devices(client_id, metric.storage_info)
        app.network_interface_model.update_interfaces(client_id, metric.network_info)
        app.process_table.update(client_id, entries)
        app.status_model.update_rt_values(client_id, cpu, memory)