"""Protocol definitions for document store clients."""

from collections.abc import Awaitable, Mapping
from typing import Any, Protocol, runtime_checkable

type Row = dict[str, Any]
type FilterValue = str | int | bool | None
type Filters = Mapping[str, FilterValue]


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """
    Interface every document store client implements.

    Both SupabaseClient and MemoryClient conform to this protocol. Filters
    are column equality tests combined with AND; a ``None`` value matches
    rows where the column is null.
    """

    @property
    def backend(self) -> str:
        """Short name of the backing store, reported by the health check."""
        ...

    def insert(self, table: str, row: Row) -> Awaitable[Row]:
        """Insert a row and return it as stored."""
        ...

    def select(
        self,
        table: str,
        filters: Filters | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> Awaitable[list[Row]]:
        """Return the rows matching ``filters``, optionally ordered."""
        ...

    def update(self, table: str, filters: Filters, fields: Row) -> Awaitable[list[Row]]:
        """Apply ``fields`` to the matching rows and return them."""
        ...

    def delete(self, table: str, filters: Filters) -> Awaitable[int]:
        """Delete the matching rows and return how many were removed."""
        ...

    def ping(self) -> Awaitable[bool]:
        """Check whether the store is reachable."""
        ...

    def close(self) -> Awaitable[None]:
        """Release connections held by the client."""
        ...
