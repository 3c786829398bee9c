"""In-memory document store for development and tests, used when Supabase is not configured."""

from asyncio import Lock
from collections import defaultdict
from copy import deepcopy
from logging import getLogger

from app.clients.protocols import Filters, Row
from app.configs import file_logger
from app.errors import StoreConnectionError

logger = file_logger(getLogger(__name__))


def _matches(row: Row, filters: Filters | None) -> bool:
    if not filters:
        return True
    for column, expected in filters.items():
        actual = row.get(column)
        if expected is None:
            if actual is not None:
                return False
        elif actual != expected:
            return False
    return True


class MemoryClient:
    """
    Async in-memory document store that mimics SupabaseClient.

    Tables are created on first write. Rows are deep-copied on the way in
    and on the way out, so callers never share state with the store. All
    operations are serialized through an asyncio.Lock.
    """

    def __init__(self) -> None:
        self._tables: defaultdict[str, list[Row]] = defaultdict(list)
        self._lock = Lock()
        self.is_connected: bool = True

    @property
    def backend(self) -> str:
        return "memory"

    def _ensure_open(self) -> None:
        if not self.is_connected:
            raise StoreConnectionError(detail="In-memory store is closed")

    async def insert(self, table: str, row: Row) -> Row:
        async with self._lock:
            self._ensure_open()
            stored = deepcopy(row)
            self._tables[table].append(stored)
            logger.debug(f"Inserted row into '{table}'")
            return deepcopy(stored)

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        async with self._lock:
            self._ensure_open()
            rows = [row for row in self._tables.get(table, []) if _matches(row, filters)]
            if order_by is not None:
                # Nulls sort last in both directions; ties keep insertion order
                present = [r for r in rows if r.get(order_by) is not None]
                missing = [r for r in rows if r.get(order_by) is None]
                present.sort(key=lambda r: r[order_by], reverse=descending)
                rows = present + missing
            return deepcopy(rows)

    async def update(self, table: str, filters: Filters, fields: Row) -> list[Row]:
        async with self._lock:
            self._ensure_open()
            updated: list[Row] = []
            for row in self._tables.get(table, []):
                if _matches(row, filters):
                    row.update(deepcopy(fields))
                    updated.append(deepcopy(row))
            logger.debug(f"Updated {len(updated)} row(s) in '{table}'")
            return updated

    async def delete(self, table: str, filters: Filters) -> int:
        async with self._lock:
            self._ensure_open()
            rows = self._tables.get(table, [])
            kept = [row for row in rows if not _matches(row, filters)]
            removed = len(rows) - len(kept)
            if table in self._tables:
                self._tables[table] = kept
            logger.debug(f"Deleted {removed} row(s) from '{table}'")
            return removed

    async def ping(self) -> bool:
        return self.is_connected

    async def clear(self) -> None:
        """Drop every table."""
        async with self._lock:
            self._tables.clear()

    async def close(self) -> None:
        async with self._lock:
            self.is_connected = False
            self._tables.clear()
