"""Process table of the client currently in context."""

from __future__ import annotations

from collections.abc import Iterable

from vmmonitor.clientconfig import HOST_ID
from vmmonitor.flowbuffer import Signal
from vmmonitor.processes import FIELD_COUNT, ProcessEntry, ProcessField, ProcessIndexer

_HEADERS = (
    "Pid",
    "Status",
    "Cpu Usage(%)",
    "Memory Usage(%)",
    "Executable",
    "Arguments",
)

_DISPLAY_LIMIT = 20
_DISPLAY_KEEP = 17


class ProcessTableModel:
    """Sortable table of processes, holding the latest list of every client.

    Only the context client's processes are shown. :attr:`data_changed`
    emits ``(first_row, first_column, last_row, last_column)``.
    """

    def __init__(self) -> None:
        self._indexer = ProcessIndexer()
        self._entries: dict[int, list[ProcessEntry]] = {}
        self._context = HOST_ID
        self.data_changed = Signal()
        self._indexer.data_changed.connect(self._on_indexer_changed)

    @property
    def context(self) -> int:
        """Id of the client whose processes are shown."""
        return self._context

    def row_count(self) -> int:
        return len(self._indexer)

    def column_count(self) -> int:
        return FIELD_COUNT

    def data(self, row: int, column: int) -> object:
        """Displayed value of a cell; long text is shortened."""
        if column not in ProcessField.__members__.values():
            return None
        entry = self._indexer[row]
        field = ProcessField(column)
        if field is ProcessField.PID:
            return entry.pid
        if field is ProcessField.STATUS:
            return entry.status
        if field is ProcessField.CPU:
            return entry.cpu_usage
        if field is ProcessField.MEMORY:
            return entry.memory_usage
        if field is ProcessField.EXECUTABLE:
            return self.display_string(entry.executable)
        return self.display_string(entry.args)

    def header_data(self, section: int) -> str | None:
        if 0 <= section < len(_HEADERS):
            return _HEADERS[section]
        return None

    def sort_by_column(self, column: int, ascending: bool = True) -> None:
        """Sort the shown rows by ``column``; raises ValueError for an unknown column."""
        self._indexer.set_sort_property(ProcessField(column), ascending)

    def update(self, client_id: int, processes: Iterable[ProcessEntry]) -> None:
        """Store the latest processes of ``client_id``."""
        entries = list(processes)
        self._entries[client_id] = entries
        if client_id == self._context:
            self._indexer.update(entries)

    def remove(self, client_id: int) -> None:
        """Forget ``client_id``; the host is shown if it was in context."""
        if client_id == self._context:
            self.set_context(HOST_ID)
        self._entries.pop(client_id, None)

    def append(self, client_id: int) -> None:
        """Start tracking ``client_id`` with an empty process list."""
        self._entries.setdefault(client_id, [])

    def set_context(self, client_id: int) -> None:
        """Show the processes of ``client_id``."""
        self._context = client_id
        self._indexer.update(self._entries.setdefault(client_id, []))

    @staticmethod
    def display_string(text: str) -> str:
        """``text`` shortened with an ellipsis if it exceeds the column width."""
        if len(text) > _DISPLAY_LIMIT:
            return text[:_DISPLAY_KEEP] + "..."
        return text

    def _on_indexer_changed(self) -> None:
        self.data_changed.emit(0, 0, self.row_count() - 1, self.column_count() - 1)