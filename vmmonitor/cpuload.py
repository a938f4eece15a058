"""Overall and per-core CPU load histories of every client."""

from __future__ import annotations

from collections.abc import Sequence

from vmmonitor.clientconfig import HOST_ID, UnknownClientError
from vmmonitor.lineargraph import CoreLoadDataModelProvider, LinearGraphDataModel, new_graph_data
from vmmonitor.rangemodel import RangeModel


class CpuLoadData:
    """Load histories of one client: overall and one per core."""

    def __init__(self, core_count: int = 0) -> None:
        self.overall_load = new_graph_data()
        self.core_loads = [new_graph_data() for _ in range(core_count)]


class CpuLoadDataModel(LinearGraphDataModel):
    """Graph of the context client's overall CPU load.

    Switching context also hands the per-core histories to the core
    provider, and loads of the context client drive the range gauge.
    """

    def __init__(self, range_model: RangeModel, core_provider: CoreLoadDataModelProvider) -> None:
        super().__init__()
        self._range_model = range_model
        self._core_provider = core_provider
        self._load_data: dict[int, CpuLoadData] = {}
        self.context = HOST_ID

    def _load(self, client_id: int) -> CpuLoadData:
        try:
            return self._load_data[client_id]
        except KeyError:
            raise UnknownClientError(f"no CPU data for client {client_id}") from None

    def update_loads(self, client_id: int, overall_load: float, core_loads: Sequence[float]) -> None:
        """Record new load figures; extra core values are ignored."""
        load = self._load(client_id)
        load.overall_load.push(overall_load)
        for history, value in zip(load.core_loads, core_loads):
            history.push(value)
        if client_id == self.context:
            self._range_model.value = overall_load

    def set_context(self, client_id: int) -> None:
        """Show the histories of ``client_id``."""
        self.context = client_id
        load = self._load(client_id)
        self._core_provider.set_data_providers(load.core_loads)
        self.set_data_provider(load.overall_load)

    def append(self, client_id: int, core_count: int) -> None:
        """Start tracking ``client_id`` with ``core_count`` cores."""
        if client_id not in self._load_data:
            self._load_data[client_id] = CpuLoadData(core_count)

    def remove(self, client_id: int) -> None:
        """Forget ``client_id``; the host is shown if it was in context."""
        if client_id == self.context:
            self.set_context(HOST_ID)
        self._load_data.pop(client_id, None)