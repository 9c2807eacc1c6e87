"""Supabase database gateway.

Talks to the PostgREST API that every Supabase project exposes under
``/rest/v1``. Only the two operations the bot needs are implemented: inserting
one row and reading rows that match simple column filters. Any transport or
server-side failure is logged with full detail and surfaced as a
:class:`~school_bot.errors.StoreError` whose text is safe to show to users.
"""

import asyncio
import logging
from typing import Any

import aiohttp

from ..bot.messages import STORE_INSERT_FAILED, STORE_QUERY_FAILED
from ..config import StoreConfig
from ..errors import StoreError

logger = logging.getLogger(__name__)


def eq(value: object) -> str:
    """PostgREST equality filter."""
    return f"eq.{value}"


LIKE_SPECIAL = ("\\", "%", "_", "*")


def ilike(value: str) -> str:
    """PostgREST case-insensitive equality filter.

    Pattern characters in ``value`` are escaped so they only match themselves.
    """
    for char in LIKE_SPECIAL:
        value = value.replace(char, "\\" + char)
    return f"ilike.{value}"


class RecordStore:
    """Minimal PostgREST client sharing one HTTP session per process."""

    def __init__(self, config: StoreConfig):
        """Initialize the gateway.

        Args:
            config: Supabase URL, key, timeout and table names.
        """
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    def _create_session(self) -> aiohttp.ClientSession:
        headers = {
            "apikey": self.config.key,
            "Authorization": f"Bearer {self.config.key}",
            "Accept": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        return aiohttp.ClientSession(headers=headers, timeout=timeout)

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = self._create_session()
        return self._session

    def _table_url(self, table: str) -> str:
        return f"{self.config.rest_url}/{table}"

    async def insert(
        self, table: str, row: dict[str, Any], returning: str | None = "id"
    ) -> dict[str, Any]:
        """Insert one row.

        Args:
            table: Target table name.
            row: Column values.
            returning: Columns to read back, or None to skip the read-back.

        Returns:
            The returned columns of the new row, empty when ``returning`` is None.

        Raises:
            StoreError: If the request fails or the server rejects the row.
        """
        params = {"select": returning} if returning else None
        headers = {"Prefer": "return=representation" if returning else "return=minimal"}

        try:
            async with self.session.post(
                self._table_url(table), json=[row], params=params, headers=headers
            ) as response:
                if response.status not in (200, 201, 204):
                    error_text = await response.text()
                    logger.error(
                        f"Supabase insert into {table} failed: {response.status} - {error_text}"
                    )
                    raise StoreError("insert", STORE_INSERT_FAILED)

                if not returning:
                    return {}
                data = await response.json()

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Supabase insert into {table} failed: {e!r}")
            raise StoreError("insert", STORE_INSERT_FAILED) from e

        if not data:
            logger.error(f"Supabase insert into {table} returned no rows")
            raise StoreError("insert", STORE_INSERT_FAILED)

        return data[0]

    async def query(
        self,
        table: str,
        filters: dict[str, str] | None = None,
        columns: str = "*",
        order: str | None = None,
    ) -> list[dict[str, Any]]:
        """Read rows matching PostgREST column filters.

        Args:
            table: Source table name.
            filters: Mapping of column to filter expression, see :func:`eq`
                and :func:`ilike`.
            columns: Comma-separated column list.
            order: PostgREST order clause such as ``"id.asc"``.

        Returns:
            Matching rows in the order the server returned them.

        Raises:
            StoreError: If the request fails or the server rejects the query.
        """
        params: dict[str, str] = {"select": columns}
        if filters:
            params.update(filters)
        if order:
            params["order"] = order

        try:
            async with self.session.get(self._table_url(table), params=params) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(
                        f"Supabase query on {table} failed: {response.status} - {error_text}"
                    )
                    raise StoreError("query", STORE_QUERY_FAILED)

                data = await response.json()

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Supabase query on {table} failed: {e!r}")
            raise StoreError("query", STORE_QUERY_FAILED) from e

        logger.debug(f"Supabase query on {table} returned {len(data)} rows")
        return data

    async def close(self) -> None:
        """Close the shared HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
