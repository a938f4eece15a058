"""Table models over rolling load histories, one per graph."""

from __future__ import annotations

import enum
from collections.abc import Sequence

from vmmonitor.flowbuffer import FlowBuffer, Signal

MAX_SIZE = 20
"""Number of samples kept for each graph."""

_USER_ROLE = 0x0100


def new_graph_data() -> FlowBuffer:
    """A fresh, zero-filled sample history of :data:`MAX_SIZE` entries."""
    return FlowBuffer(MAX_SIZE)


class LinearGraphDataModel:
    """Two-column table: sample number (from 1) and sample value.

    :attr:`data_changed` emits ``(first_row, last_row)`` whenever the
    underlying buffer changes or is replaced.
    """

    max_size = MAX_SIZE

    def __init__(self, data: FlowBuffer | None = None) -> None:
        self.data_changed = Signal()
        self._provider: FlowBuffer | None = None
        if data is not None:
            self.set_data_provider(data)

    def data(self, row: int, column: int) -> float:
        if column == 0:
            return row + 1
        if self._provider is None:
            raise IndexError("graph model has no data provider")
        return self._provider[row]

    def row_count(self) -> int:
        return len(self._provider) if self._provider is not None else 0

    def column_count(self) -> int:
        return 2

    def set_data_provider(self, data: FlowBuffer) -> None:
        """Show ``data`` instead of the previous buffer."""
        self._detach()
        data.changed.connect(self._on_data_changed)
        self._provider = data
        self._on_data_changed()

    def _detach(self) -> None:
        if self._provider is not None:
            self._provider.changed.disconnect(self._on_data_changed)
            self._provider = None

    def _on_data_changed(self) -> None:
        self.data_changed.emit(0, self.row_count() - 1)


class CoreLoadDataModel(LinearGraphDataModel):
    """Graph of one CPU core's load."""

    def __init__(self, data: FlowBuffer) -> None:
        super().__init__(data)


class CoreLoadRole(enum.IntEnum):
    DATA_MODEL = _USER_ROLE + 1
    CORE_INDEX = _USER_ROLE + 2


class CoreLoadDataModelProvider:
    """List of per-core graph models, reused when the core set changes."""

    def __init__(self) -> None:
        self._models: list[CoreLoadDataModel] = []
        self.rows_removed = Signal()
        self.rows_inserted = Signal()

    def row_count(self) -> int:
        return len(self._models)

    def data(self, row: int, role: int) -> object:
        if not 0 <= row < len(self._models):
            return None
        if role == CoreLoadRole.DATA_MODEL:
            return self._models[row]
        if role == CoreLoadRole.CORE_INDEX:
            return row
        return None

    def role_names(self) -> dict[int, str]:
        return {
            CoreLoadRole.DATA_MODEL: "datamodel",
            CoreLoadRole.CORE_INDEX: "coreIndex",
        }

    def set_data_providers(self, providers: Sequence[FlowBuffer]) -> None:
        """Show one graph per buffer in ``providers``, reusing existing models."""
        new_count = len(providers)
        old_count = len(self._models)
        if new_count < old_count:
            for model in self._models[new_count:]:
                model._detach()
            del self._models[new_count:]
            self.rows_removed.emit(new_count, old_count - 1)
        kept = min(old_count, new_count)
        for model, provider in zip(self._models[:kept], providers):
            model.set_data_provider(provider)
        if new_count > old_count:
            self._models.extend(CoreLoadDataModel(p) for p in providers[old_count:])
            self.rows_inserted.emit(old_count, new_count - 1)