"""Ordered per-client storage with a current "context" client."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

from vmmonitor.clientconfig import HOST_ID
from vmmonitor.clientmapper import ContiguousClientMapper

T = TypeVar("T")


class ClientDataContainer(Generic[T]):
    """Items keyed by client id, kept contiguous in insertion order.

    One client is the context; removing it makes the host the context.
    """

    def __init__(self) -> None:
        self._mapper = ContiguousClientMapper()
        self._items: list[T] = []
        self.context_client = HOST_ID

    def at_index(self, index: int) -> T:
        """Item at position ``index``."""
        if index < 0:
            raise IndexError("container index out of range")
        return self._items[index]

    def get(self, client_id: int) -> T:
        """Item belonging to ``client_id``; raises KeyError if unknown."""
        return self._items[self._mapper.index_of(client_id)]

    def set(self, client_id: int, item: T) -> None:
        """Replace the item belonging to ``client_id``."""
        self._items[self._mapper.index_of(client_id)] = item

    def index_of(self, client_id: int) -> int:
        """Position of ``client_id``'s item."""
        return self._mapper.index_of(client_id)

    def remove(self, client_id: int) -> None:
        """Drop ``client_id`` and its item."""
        del self._items[self._mapper.index_of(client_id)]
        self._mapper.remove_client(client_id)
        if client_id == self.context_client:
            self.context_client = HOST_ID

    def append(self, client_id: int, item: T) -> None:
        """Add ``item`` for ``client_id`` at the end."""
        self._mapper.append_client(client_id)
        self._items.append(item)

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._mapper

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def set_context(self, client_id: int) -> None:
        """Make ``client_id`` the context client."""
        self.context_client = client_id

    @property
    def context(self) -> T:
        """Item of the context client."""
        return self.get(self.context_client)

    @context.setter
    def context(self, item: T) -> None:
        self.set(self.context_client, item)

    @property
    def context_index(self) -> int:
        """Position of the context client's item."""
        return self._mapper.index_of(self.context_client)