from types import SimpleNamespace

import pytest

from vmmonitor.application import Application
from vmmonitor.clientconfig import HOST_ID
from vmmonitor.connector import ClientDispatcher, Connection
from vmmonitor.network import NetworkRole
from vmmonitor.statusmodel import StatusRole
from vmmonitor.storage import StorageRole
from vmmonitor.viewcontroller import ClientViewController


class FakeMemory:
    def __init__(self, percent):
        self.percent = percent

    def used_percent(self):
        return self.percent


class FakeMetric:
    def __init__(self, cpu, memory, storage_load, core_loads, processes, storage, network):
        self.cpu = cpu
        self.memory = FakeMemory(memory)
        self.storage_load = storage_load
        self.core_loads = core_loads
        self.processes = processes
        self.storage_info = storage
        self.network_info = network

    def overall_cpu_load(self):
        return self.cpu

    def overall_storage_load(self):
        return self.storage_load


def system_info(cores=4):
    return SimpleNamespace(
        platform="Linux",
        distribution="Distro",
        cpu_info=SimpleNamespace(model="Model X", cores=cores, speed="2 GHz"),
    )


def make_metric():
    processes = [
        SimpleNamespace(pid=10, status="R", processor_usage=5.0, memory_percent=1.0,
                        executable="/usr/bin/alpha", args="-a"),
        SimpleNamespace(pid=20, status="S", processor_usage=1.0, memory_percent=2.0,
                        executable="/usr/bin/beta", args="-b"),
    ]
    storage = [SimpleNamespace(name="root", file_system_type="ext4", device="/dev/sda1",
                               mbytes_total=1000, mbytes_free=400, used_percent=60.0)]
    network = [SimpleNamespace(name="eth0", rx_bytes=100, tx_bytes=50,
                               type_as_str=lambda: "ethernet")]
    return FakeMetric(42.5, 30.0, 60.0, [10.0, 20.0, 30.0, 40.0], processes, storage, network)


@pytest.fixture
def app(tmp_path):
    application = Application(tmp_path / "configs.xml", lambda config, local: ClientDispatcher(config))
    application.controller.connector.timeout = None
    return application


def connect(app, client_id, cores=4):
    dispatcher = ClientDispatcher(app.get_client_config(client_id))
    return ClientViewController(app, Connection(dispatcher, system_info(cores))), dispatcher


def test_construction_registers_client(app):
    controller, _ = connect(app, HOST_ID, cores=4)
    assert controller.id == HOST_ID
    assert app.status_model.row_count() == 1
    assert app.status_model.data(0, StatusRole.NAME) == "Host"
    assert app.status_model.data(0, StatusRole.CPU) == 0.0
    assert app.client_descriptor.name == "Host"
    assert app.client_descriptor.cpu_cores == 4
    app.cpu_load_model.set_context(HOST_ID)
    assert app.core_load_provider.row_count() == 4


def test_runtime_metric_updates_models(app):
    _, dispatcher = connect(app, HOST_ID)
    metric = make_metric()
    dispatcher.runtime_metric_received.emit(metric)
    assert app.status_model.data(0, StatusRole.CPU) == 42.5
    assert app.status_model.data(0, StatusRole.MEMORY) == 30.0
    assert app.cpu_range_model.value == 42.5
    assert app.memory_range_model.value == 30.0
    assert app.disk_range_model.value == 60.0
    assert app.process_table.row_count() == 2
    assert app.storage_device_model.data(0, StorageRole.DEVICE) == "/dev/sda1"
    assert app.network_interface_model.data(0, NetworkRole.NAME) == "eth0"


def test_timed_out_emits_id(app):
    controller, dispatcher = connect(app, HOST_ID)
    seen = []
    controller.timed_out.connect(seen.append)
    dispatcher.client_timed_out.emit()
    assert seen == [HOST_ID]


def test_set_context_switches_models(app):
    connect(app, HOST_ID)
    remote = app.config_model.new_config()
    controller, _ = connect(app, remote.id)
    controller.set_context()
    assert app.navigator.client_context == remote.id
    assert app.process_table.context == remote.id
    assert app.client_descriptor.context == remote.id


def test_close_remote_unregisters_and_returns_to_host(app):
    connect(app, HOST_ID)
    remote = app.config_model.new_config()
    controller, dispatcher = connect(app, remote.id)
    controller.set_context()
    controller.close()
    assert app.status_model.row_count() == 1
    assert app.status_model.data(0, StatusRole.ID) == HOST_ID
    assert app.process_table.context == HOST_ID
    dispatcher.runtime_metric_received.emit(make_metric())
    assert app.status_model.data(0, StatusRole.CPU) == 0.0


def test_close_host_keeps_models(app):
    controller, dispatcher = connect(app, HOST_ID)
    seen = []
    controller.timed_out.connect(seen.append)
    controller.close()
    assert app.status_model.row_count() == 1
    dispatcher.client_timed_out.emit()
    assert seen == []