"""Page navigation requests and the current client context of the view."""

from __future__ import annotations

from vmmonitor.clientconfig import HOST_ID
from vmmonitor.flowbuffer import Signal


class PageNavigator:
    """Emits page requests for the view and tracks which client is shown."""

    def __init__(self) -> None:
        self.main_page_requested = Signal()
        self.client_overview_page_requested = Signal()
        self.client_cpu_page_requested = Signal()
        self.client_disk_page_requested = Signal()
        self.client_memory_page_requested = Signal()
        self.client_network_page_requested = Signal()
        self.open_client_config_page_requested = Signal()
        self.close_client_config_page_requested = Signal()
        self.client_context_changed = Signal()
        self.client_disconnect_requested = Signal()
        self._current_context = HOST_ID

    @property
    def client_context(self) -> int:
        """Id of the client currently shown."""
        return self._current_context

    def show_client_overview_page(self, client_id: int) -> None:
        """Switch to ``client_id`` if needed and request its overview page."""
        if client_id != self._current_context:
            self._current_context = client_id
            self.client_context_changed.emit(client_id)
        self.client_overview_page_requested.emit()

    def show_main_page(self) -> None:
        self.main_page_requested.emit()

    def show_client_cpu_page(self) -> None:
        self.client_cpu_page_requested.emit()

    def show_client_memory_page(self) -> None:
        self.client_memory_page_requested.emit()

    def show_client_disk_page(self) -> None:
        self.client_disk_page_requested.emit()

    def show_client_network_page(self) -> None:
        self.client_network_page_requested.emit()

    def open_client_config_page(self) -> None:
        self.open_client_config_page_requested.emit()

    def close_client_config_page(self) -> None:
        self.close_client_config_page_requested.emit()

    def register_context(self, context: int) -> None:
        """Make ``context`` the current client and announce it."""
        self._current_context = context
        self.client_context_changed.emit(self._current_context)

    def request_disconnect(self) -> None:
        """Ask for the current client to be disconnected."""
        self.client_disconnect_requested.emit(self._current_context)


class MenubarModel:
    """Menu bar actions exposed to the view."""

    def __init__(self) -> None:
        self.increase_cpu = Signal()
        self.decrease_cpu = Signal()