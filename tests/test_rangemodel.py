import pytest

from vmmonitor.rangemodel import (
    CpuRangeModel,
    DiskRangeModel,
    MemoryRangeModel,
    RangeModel,
)


def test_bounds_and_initial_value():
    model = RangeModel()
    assert model.minimum == 0
    assert model.maximum == 100
    assert model.step_size == 1
    assert model.value == 0


def test_value_in_range_is_accepted_and_emitted():
    model = CpuRangeModel()
    seen = []
    model.value_changed.connect(seen.append)
    model.value = 42.5
    assert model.value == 42.5
    assert seen == [42.5]


@pytest.mark.parametrize("value", [-1, 100.5, 1000])
def test_value_out_of_range_is_ignored(value):
    model = MemoryRangeModel()
    model.value = 10
    seen = []
    model.value_changed.connect(seen.append)
    model.value = value
    assert model.value == 10
    assert seen == []


def test_same_value_does_not_emit():
    model = DiskRangeModel()
    model.value = 30
    seen = []
    model.value_changed.connect(seen.append)
    model.value = 30
    assert seen == []


def test_bounds_are_inclusive():
    model = RangeModel()
    model.value = 100
    assert model.value == 100
    model.value = 0
    assert model.value == 0


def test_activated_signal():
    model = CpuRangeModel()
    hits = []
    model.activated.connect(lambda: hits.append("hit"))
    model.activated.emit()
    assert hits == ["hit"]


def test_models_are_independent():
    cpu = CpuRangeModel()
    mem = MemoryRangeModel()
    cpu.value = 50
    assert mem.value == 0
    assert isinstance(mem, RangeModel) and mem.maximum == cpu.maximum