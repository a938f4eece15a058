import pytest

from vmmonitor.statusmodel import ClientStatusModel, StatusEntry, StatusRole


def _model():
    model = ClientStatusModel()
    model.add(StatusEntry(0, "Host", 0.0, 0.0))
    model.add(StatusEntry(4, "guest", 10.0, 20.0))
    return model


def test_add_and_read_roles():
    model = _model()
    assert model.row_count() == 2
    assert model.data(1, StatusRole.ID) == 4
    assert model.data(1, StatusRole.NAME) == "guest"
    assert model.data(1, StatusRole.CPU) == 10.0
    assert model.data(1, StatusRole.MEMORY) == 20.0


def test_out_of_range_and_unknown_role():
    model = _model()
    assert model.data(2, StatusRole.ID) is None
    assert model.data(-1, StatusRole.ID) is None
    assert model.data(0, 0) is None


def test_role_names():
    assert ClientStatusModel().role_names()[StatusRole.ID] == "clientId"


def test_remove_shifts_rows():
    model = _model()
    model.add(StatusEntry(9, "other", 1.0, 2.0))
    removed = []
    model.rows_removed.connect(lambda a, b: removed.append((a, b)))
    model.remove(4)
    assert model.row_count() == 2
    assert model.data(1, StatusRole.ID) == 9
    assert removed == [(1, 1)]


def test_remove_unknown_raises():
    with pytest.raises(KeyError):
        _model().remove(77)


def test_update_rt_values_notifies_row():
    model = _model()
    changes = []
    model.data_changed.connect(lambda a, b: changes.append((a, b)))
    model.update_rt_values(4, 55.5, 66.6)
    assert model.data(1, StatusRole.CPU) == 55.5
    assert model.data(1, StatusRole.MEMORY) == 66.6
    assert changes == [(1, 1)]


def test_update_replaces_entry():
    model = _model()
    model.update(4, StatusEntry(4, "renamed", 3.0, 4.0))
    assert model.data(1, StatusRole.NAME) == "renamed"
    assert model.data(1, StatusRole.CPU) == 3.0