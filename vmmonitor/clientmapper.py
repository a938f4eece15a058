"""Bidirectional mapping between client ids and contiguous indices."""

from __future__ import annotations

import threading


class ContiguousClientMapper:
    """Keeps client ids packed in insertion order at indices ``0..n-1``.

    Removing a client shifts later clients down by one index.
    """

    def __init__(self) -> None:
        self._index_lookup: dict[int, int] = {}
        self._clients: list[int] = []
        self._lock = threading.Lock()

    def index_of(self, client_id: int) -> int:
        """Index of ``client_id``; raises KeyError if it is unknown."""
        return self._index_lookup[client_id]

    def client_at(self, index: int) -> int:
        """Client id stored at ``index``; raises IndexError if out of range."""
        if index < 0:
            raise IndexError("client index out of range")
        return self._clients[index]

    def remove_client(self, client_id: int) -> None:
        """Remove ``client_id`` and close the gap it leaves."""
        with self._lock:
            index = self._index_lookup.pop(client_id)
            del self._clients[index]
            for position, moved in enumerate(self._clients[index:], start=index):
                self._index_lookup[moved] = position

    def append_client(self, client_id: int) -> int:
        """Add ``client_id`` at the end and return its index."""
        with self._lock:
            if client_id in self._index_lookup:
                raise ValueError(f"client {client_id} is already mapped")
            index = len(self._clients)
            self._index_lookup[client_id] = index
            self._clients.append(client_id)
            return index

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._index_lookup

    def __len__(self) -> int:
        return len(self._clients)