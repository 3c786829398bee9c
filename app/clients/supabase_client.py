# app/clients/supabase_client.py

"""Document store client talking to Supabase through its PostgREST endpoint."""

from logging import getLogger
from typing import Any

from httpx import AsyncBaseTransport, AsyncClient, HTTPError, Response, TransportError
from orjson import JSONDecodeError, dumps, loads

from app.clients.protocols import FilterValue, Filters, Row
from app.configs import file_logger, settings
from app.decorators import with_retry
from app.errors import StoreConnectionError, StoreRequestError
from app.managers.circuit_breaker import store_circuit_breaker

logger = file_logger(getLogger(__name__))

RETURN_ROWS = "return=representation"


def _literal(value: FilterValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _filter_params(filters: Filters | None) -> dict[str, str]:
    """Translate equality filters into PostgREST query operators."""
    if not filters:
        return {}
    return {
        column: "is.null" if value is None else f"eq.{_literal(value)}"
        for column, value in filters.items()
    }


class SupabaseClient:
    """
    Async Supabase table client built on httpx.

    Every request authenticates with the service-role key. Transport
    failures and 5xx answers raise ``StoreConnectionError``, are retried
    with backoff and count against the store circuit breaker; other error
    statuses raise ``StoreRequestError`` immediately.
    """

    def __init__(
        self,
        url: str | None = None,
        service_key: str | None = None,
        timeout: float = settings.STORE_REQUEST_TIMEOUT,
        transport: AsyncBaseTransport | None = None,
    ) -> None:
        url = url or settings.SUPABASE_URL
        service_key = service_key or settings.SUPABASE_SERVICE_ROLE_KEY
        if not url or not service_key:
            raise StoreConnectionError(detail="Supabase URL and service role key are required")

        self._client = AsyncClient(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )
        self._circuit_breaker = store_circuit_breaker

    @property
    def backend(self) -> str:
        return "supabase"

    async def _send(
        self,
        method: str,
        table: str,
        params: dict[str, str],
        body: Any = None,  # noqa: ANN401
        prefer: str | None = None,
    ) -> Response:
        headers = {"Prefer": prefer} if prefer else None
        content = dumps(body) if body is not None else None
        try:
            response = await self._client.request(
                method,
                f"/{table}",
                params=params,
                content=content,
                headers=headers,
            )
        except TransportError as e:
            msg = f"{method} {table} failed: {e}"
            raise StoreConnectionError(detail=msg) from e

        if response.status_code >= 500:
            msg = f"{method} {table} failed with {response.status_code}"
            raise StoreConnectionError(detail=msg)
        if response.is_error:
            msg = f"{method} {table} rejected with {response.status_code}: {response.text}"
            raise StoreRequestError(detail=msg)
        return response

    @with_retry(
        max_retries=settings.STORE_MAX_RETRIES,
        base_delay=0.2,
        max_delay=2.0,
        exec_retry=(StoreConnectionError,),
    )
    async def _request(
        self,
        method: str,
        table: str,
        params: dict[str, str],
        body: Any = None,  # noqa: ANN401
        prefer: str | None = None,
    ) -> Any:  # noqa: ANN401
        response = await self._circuit_breaker.call(
            self._send,
            method,
            table,
            params,
            body,
            prefer,
        )
        if not response.content:
            return None
        try:
            return loads(response.content)
        except JSONDecodeError as e:
            msg = f"{method} {table} returned a non-JSON body"
            raise StoreRequestError(detail=msg) from e

    async def insert(self, table: str, row: Row) -> Row:
        rows = await self._request("POST", table, {}, row, RETURN_ROWS)
        if not rows:
            raise StoreRequestError(detail=f"Insert into {table} returned no row")
        return rows[0]

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        params = {"select": "*", **_filter_params(filters)}
        if order_by is not None:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        return await self._request("GET", table, params) or []

    async def update(self, table: str, filters: Filters, fields: Row) -> list[Row]:
        rows = await self._request("PATCH", table, _filter_params(filters), fields, RETURN_ROWS)
        return rows or []

    async def delete(self, table: str, filters: Filters) -> int:
        rows = await self._request("DELETE", table, _filter_params(filters), None, RETURN_ROWS)
        return len(rows or [])

    async def ping(self) -> bool:
        try:
            response = await self._client.get("/")
        except HTTPError as e:
            logger.warning(f"Supabase ping failed: {e}")
            return False
        return response.is_success

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("Supabase client closed")
