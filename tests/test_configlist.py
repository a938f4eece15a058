import pytest

from vmmonitor.clientconfig import (
    HOST_ID,
    ConnectionState,
    ConnectionStatus,
    UnknownClientError,
)
from vmmonitor.configlist import ClientConfigListModel, ConfigRole
from vmmonitor.pagenavigator import PageNavigator


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "configs.xml"


@pytest.fixture
def navigator():
    return PageNavigator()


def test_missing_file_creates_host_config(config_path, navigator):
    model = ClientConfigListModel(config_path, navigator)
    assert model.row_count() == 1
    assert model.data(0, ConfigRole.ID) == HOST_ID
    assert model.data(0, ConfigRole.NAME) == "Host"
    assert model.data(0, ConfigRole.IS_REMOTE) is False
    assert config_path.exists()


def test_context_starts_as_host(config_path):
    model = ClientConfigListModel(config_path)
    assert model.context.identifier == HOST_ID
    assert model.context.port == 9999


def test_new_config_uses_available_id(config_path):
    model = ClientConfigListModel(config_path)
    expected_id = model.available_id()
    config = model.new_config()
    assert config.id == expected_id
    assert config.name == "New Client"
    assert config.address.port == 9000
    assert model.row_count() == 2
    assert model.context.identifier == expected_id
    assert model.data(1, ConfigRole.IS_REMOTE) is True


def test_available_id_skips_used_ids(config_path):
    model = ClientConfigListModel(config_path)
    first = model.new_config().id
    second = model.new_config().id
    assert HOST_ID != first != second
    assert model.available_id() not in {HOST_ID, first, second}


def test_round_trip_through_file(config_path):
    model = ClientConfigListModel(config_path)
    created = model.new_config()
    model.save_context("guest", "7", "1234")
    reloaded = ClientConfigListModel(config_path)
    assert reloaded.row_count() == model.row_count()
    found = reloaded.search_for_client_config(created.id)
    assert found.name == "guest"
    assert found.address.cid == 7
    assert found.address.port == 1234


def test_save_context_with_unparsable_number(config_path):
    model = ClientConfigListModel(config_path)
    created = model.new_config()
    model.save_context("guest", "abc", "5")
    found = model.search_for_client_config(created.id)
    assert found.address.cid == 0
    assert found.address.port == 5


def test_search_unknown_returns_none(config_path):
    model = ClientConfigListModel(config_path)
    assert model.search_for_client_config(42) is None


def test_delete_config(config_path):
    model = ClientConfigListModel(config_path)
    created = model.new_config()
    removed = []
    model.rows_removed.connect(lambda first, last: removed.append((first, last)))
    model.delete_config(created.id)
    assert model.search_for_client_config(created.id) is None
    assert model.row_count() == 1
    assert removed == [(1, 1)]
    assert ClientConfigListModel(config_path).row_count() == 1


def test_delete_unknown_raises(config_path):
    model = ClientConfigListModel(config_path)
    with pytest.raises(UnknownClientError):
        model.delete_config(99)


def test_notify_status_changed(config_path):
    model = ClientConfigListModel(config_path)
    changes = []
    model.data_changed.connect(lambda a, b: changes.append((a, b)))
    model.notify_client_status_changed(ConnectionStatus(ConnectionState.ALIVE, "up"), HOST_ID)
    assert model.data(0, ConfigRole.STATUS) == ConnectionState.ALIVE
    assert model.data(0, ConfigRole.STATUS_MESSAGE) == "up"
    assert changes == [(0, 0)]


def test_notify_unknown_raises(config_path):
    model = ClientConfigListModel(config_path)
    with pytest.raises(UnknownClientError):
        model.notify_client_status_changed(ConnectionStatus(), 77)


def test_edit_and_save_drive_navigator(config_path, navigator):
    model = ClientConfigListModel(config_path, navigator)
    created = model.new_config()
    opened, closed = [], []
    navigator.open_client_config_page_requested.connect(lambda: opened.append(True))
    navigator.close_client_config_page_requested.connect(lambda: closed.append(True))
    model.edit_config(HOST_ID)
    assert model.context.identifier == HOST_ID
    model.edit_config(created.id)
    assert model.context.identifier == created.id
    model.revert_context()
    assert len(opened) == 2
    assert len(closed) == 1


def test_update_config_replaces_context(config_path):
    model = ClientConfigListModel(config_path)
    created = model.new_config()
    replacement = model.search_for_client_config(created.id)
    replacement.name = "renamed"
    model.update_config(replacement)
    assert model.search_for_client_config(created.id).name == "renamed"


def test_invalid_row_and_role(config_path):
    model = ClientConfigListModel(config_path)
    assert model.data(5, ConfigRole.NAME) is None
    assert model.data(0, 1) is None


def test_role_names(config_path):
    model = ClientConfigListModel(config_path)
    names = model.role_names()
    assert names[ConfigRole.ID] == "identifier"
    assert names[ConfigRole.STATUS_MESSAGE] == "statusMessage"


def test_malformed_file_raises(config_path):
    config_path.write_text("<root><client_config><name>x</name></client_config></root>")
    with pytest.raises(ValueError):
        ClientConfigListModel(config_path)


def test_unparsable_file_raises(config_path):
    config_path.write_text("<root><unclosed>")
    with pytest.raises(ValueError):
        ClientConfigListModel(config_path)


def test_empty_file_gets_host(config_path):
    config_path.write_text("")
    model = ClientConfigListModel(config_path)
    assert model.search_for_client_config(HOST_ID).name == "Host"