from types import SimpleNamespace

import pytest

from vmmonitor.application import Application
from vmmonitor.clientconfig import HOST_ID, ConnectionState, UnknownClientError
from vmmonitor.configlist import ConfigRole
from vmmonitor.connector import ClientDispatcher
from vmmonitor.controller import Controller


class RecordingFactory:
    def __init__(self):
        self.calls = []
        self.dispatchers = {}
        self.fail = False

    def __call__(self, config, local):
        self.calls.append((config.id, local))
        if self.fail:
            raise ConnectionError("refused")
        dispatcher = ClientDispatcher(config)
        self.dispatchers[config.id] = dispatcher
        return dispatcher


def system_info():
    return SimpleNamespace(
        platform="Linux",
        distribution="Distro",
        cpu_info=SimpleNamespace(model="Model X", cores=2, speed="2 GHz"),
    )


@pytest.fixture
def app(tmp_path):
    application = Application(tmp_path / "configs.xml", lambda config, local: ClientDispatcher(config))
    application.controller.connector.timeout = None
    return application


@pytest.fixture
def factory():
    return RecordingFactory()


@pytest.fixture
def controller(app, factory):
    return Controller(app, factory, None)


def config_row(app, client_id):
    rows = [r for r in range(app.config_model.row_count())
            if app.config_model.data(r, ConfigRole.ID) == client_id]
    return rows[0]


def connect_host(controller, factory):
    controller.start_execution()
    factory.dispatchers[HOST_ID].client_connected.emit(system_info())


def test_start_execution_connects_locally(controller, factory):
    controller.start_execution()
    assert factory.calls == [(HOST_ID, True)]
    assert controller.connector.is_pending(HOST_ID)


def test_connection_success_creates_view_controller(app, controller, factory):
    connect_host(controller, factory)
    assert controller.view_controller(HOST_ID).id == HOST_ID
    assert not controller.connector.is_pending(HOST_ID)
    assert app.status_model.row_count() == 1


def test_view_controller_unknown_raises(controller):
    with pytest.raises(UnknownClientError):
        controller.view_controller(HOST_ID)


def test_handle_connection_remote_once(app, controller, factory):
    remote = app.config_model.new_config()
    controller.handle_connection(remote.id)
    controller.handle_connection(remote.id)
    assert factory.calls == [(remote.id, False)]
    assert controller.connector.is_pending(remote.id)


def test_handle_connection_ignores_unknown_and_failures(app, controller, factory):
    controller.handle_connection(77)
    assert factory.calls == []
    remote = app.config_model.new_config()
    factory.fail = True
    controller.handle_connection(remote.id)
    assert not controller.connector.is_pending(remote.id)


def test_connection_failure_marks_timed_out(app, controller, factory):
    remote = app.config_model.new_config()
    controller.handle_connection(remote.id)
    controller.connector.resolve_clients()
    row = config_row(app, remote.id)
    assert app.config_model.data(row, ConfigRole.STATUS) == ConnectionState.TIMED_OUT
    assert app.config_model.data(row, ConfigRole.STATUS_MESSAGE) == "Timed out"


def test_config_delete_only_when_disconnected(app, controller, factory):
    connect_host(controller, factory)
    assert controller.handle_config_delete(HOST_ID) is False
    assert app.config_model.search_for_client_config(HOST_ID) is not None
    remote = app.config_model.new_config()
    assert controller.handle_config_delete(remote.id) is True
    assert app.config_model.search_for_client_config(remote.id) is None


def test_disconnect_request(app, controller, factory):
    connect_host(controller, factory)
    remote = app.config_model.new_config()
    controller.handle_connection(remote.id)
    factory.dispatchers[remote.id].client_connected.emit(system_info())
    controller.set_client_into_context(remote.id)
    assert app.navigator.client_context == remote.id

    controller.handle_disconnect_request(HOST_ID)
    assert controller.view_controller(HOST_ID).id == HOST_ID

    controller.handle_disconnect_request(remote.id)
    with pytest.raises(UnknownClientError):
        controller.view_controller(remote.id)
    row = config_row(app, remote.id)
    assert app.config_model.data(row, ConfigRole.STATUS) == ConnectionState.IDLE
    assert app.config_model.data(row, ConfigRole.STATUS_MESSAGE) == "Disconnected from client"
    assert app.navigator.client_context == HOST_ID
    assert app.status_model.row_count() == 1


def test_connected_client_timeout_removes_it(app, controller, factory):
    connect_host(controller, factory)
    remote = app.config_model.new_config()
    controller.handle_connection(remote.id)
    factory.dispatchers[remote.id].client_connected.emit(system_info())
    factory.dispatchers[remote.id].client_timed_out.emit()
    with pytest.raises(UnknownClientError):
        controller.view_controller(remote.id)
    row = config_row(app, remote.id)
    assert app.config_model.data(row, ConfigRole.STATUS) == ConnectionState.TIMED_OUT


def test_set_client_into_context_unknown_is_ignored(app, controller):
    controller.set_client_into_context(55)
    assert app.navigator.client_context == HOST_ID