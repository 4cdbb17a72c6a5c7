"""HTTP client for the hosted data store (PostgREST-style REST API)."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from finboard.config import settings

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"


class DataStoreError(Exception):
    """Raised when a data store request fails or returns an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None, table: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.table = table


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or str(body)
    return str(body)


class DataStoreClient:
    """
    Thin table-scoped client for the hosted data store.

    Every call maps onto one REST request:
    - select -> GET    /rest/v1/{table}?select=...&order=col.asc|desc
    - insert -> POST   /rest/v1/{table}
    - update -> PATCH  /rest/v1/{table}?id=eq.{id}
    - delete -> DELETE /rest/v1/{table}?id=eq.{id}

    No retries and no caching; failures surface as DataStoreError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Project URL of the data store (defaults to settings)
            api_key: Anonymous or service key sent as apikey and bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = (base_url or settings.datastore_url).rstrip("/")
        key = settings.datastore_key if api_key is None else api_key
        headers = {"apikey": key, "Content-Type": "application/json"}
        if key:
            headers["Authorization"] = f"Bearer {key}"
        self.client = httpx.Client(
            base_url=f"{self.base_url}{REST_PATH}",
            headers=headers,
            timeout=timeout or settings.request_timeout,
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "DataStoreClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, table: str, **kwargs: Any) -> Any:
        logger.debug(f"{method} {table} {kwargs.get('params') or ''}")
        try:
            response = self.client.request(method, f"/{table}", **kwargs)
        except httpx.HTTPError as e:
            raise DataStoreError(f"{method} {table} failed: {e}", table=table) from e

        if response.is_error:
            raise DataStoreError(
                _error_message(response), status_code=response.status_code, table=table
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DataStoreError(
                f"{method} {table} returned a non-JSON body",
                status_code=response.status_code,
                table=table,
            ) from e

    def select(
        self,
        table: str,
        columns: str = "*",
        order: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Dict[str, Any]]:
        """
        Fetch all rows of a table.

        Args:
            table: Table name
            columns: Comma separated column list
            order: Column to order by
            ascending: Sort direction for ``order``

        Returns:
            List of row dicts (empty when the table is empty)
        """
        params = {"select": columns}
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
        return self._request("GET", table, params=params) or []

    def insert(self, table: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert rows and return them as stored."""
        return self._request(
            "POST", table, json=rows, headers={"Prefer": "return=representation"}
        ) or []

    def update(self, table: str, row_id: str, values: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Update the row with the given id and return the updated rows."""
        return self._request(
            "PATCH",
            table,
            params={"id": f"eq.{row_id}"},
            json=values,
            headers={"Prefer": "return=representation"},
        ) or []

    def delete(self, table: str, row_id: str) -> None:
        """Delete the row with the given id."""
        self._request("DELETE", table, params={"id": f"eq.{row_id}"})
