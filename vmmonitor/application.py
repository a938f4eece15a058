"""The application object that owns every model and the controller."""

from __future__ import annotations

import os
from pathlib import Path

from vmmonitor.clientconfig import ClientConfiguration, UnknownClientError
from vmmonitor.configlist import ClientConfigListModel
from vmmonitor.connector import DEFAULT_TIMEOUT
from vmmonitor.controller import Controller, DispatcherFactory
from vmmonitor.cpuload import CpuLoadDataModel
from vmmonitor.description import ClientDescriptionModel
from vmmonitor.lineargraph import CoreLoadDataModelProvider
from vmmonitor.network import NetworkInterfaceModel
from vmmonitor.pagenavigator import PageNavigator
from vmmonitor.processtable import ProcessTableModel
from vmmonitor.rangemodel import CpuRangeModel, DiskRangeModel, MemoryRangeModel
from vmmonitor.statusmodel import ClientStatusModel

DEFAULT_CONFIG_FILE = "configs.xml"


class Application:
    """Creates the models, wires the view's requests to the controller."""

    def __init__(
        self,
        config_path: str | os.PathLike[str] = DEFAULT_CONFIG_FILE,
        dispatcher_factory: DispatcherFactory | None = None,
    ) -> None:
        if dispatcher_factory is None:
            raise ValueError("a dispatcher factory is required")
        self.config_path = Path(config_path)
        self.navigator = PageNavigator()
        self.config_model = ClientConfigListModel(self.config_path, self.navigator)
        self.status_model = ClientStatusModel()
        self.cpu_range_model = CpuRangeModel()
        self.memory_range_model = MemoryRangeModel()
        self.disk_range_model = DiskRangeModel()
        self.process_table = ProcessTableModel()
        self.client_descriptor = ClientDescriptionModel()
        self.core_load_provider = CoreLoadDataModelProvider()
        self.cpu_load_model = CpuLoadDataModel(self.cpu_range_model, self.core_load_provider)
        self.storage_device_model = StorageDataModelFactory.build(
            self.memory_range_model, self.disk_range_model
        )
        self.network_interface_model = NetworkInterfaceModel()
        self.controller = Controller(self, dispatcher_factory, DEFAULT_TIMEOUT)

        self.config_model.config_connect_clicked.connect(self.controller.handle_connection)
        self.config_model.delete_config_clicked.connect(self.controller.handle_config_delete)
        self.status_model.item_triggered.connect(self.controller.set_client_into_context)
        self.navigator.client_disconnect_requested.connect(
            self.controller.handle_disconnect_request
        )
        self.cpu_range_model.activated.connect(self.navigator.show_client_cpu_page)
        self.memory_range_model.activated.connect(self.navigator.show_client_memory_page)
        self.disk_range_model.activated.connect(self.navigator.show_client_disk_page)

    def get_client_config(self, client_id: int) -> ClientConfiguration:
        """Configuration of ``client_id``; raises UnknownClientError."""
        config = self.config_model.search_for_client_config(client_id)
        if config is None:
            raise UnknownClientError(f"no configuration for client {client_id}")
        return config

    def start_execution(self) -> None:
        """Show the main page and start connecting to the host."""
        self.navigator.show_main_page()
        self.controller.start_execution()


class StorageDataModelFactory:
    """Builds the storage model bound to the memory and disk gauges."""

    @staticmethod
    def build(memory_range: MemoryRangeModel, disk_range: DiskRangeModel):
        from vmmonitor.storage import StorageDataModel

        return StorageDataModel(memory_range, disk_range)