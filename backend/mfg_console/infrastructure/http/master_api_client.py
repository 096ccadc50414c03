"""Masters API client — implements the MasterDataBackend interface over HTTP.

Network contract (paths relative to the configured base URL):
    GET    /{collection}              → list of records
    GET    /{collection}/{id}         → one record
    POST   /{collection}              → created record
    PUT    /{collection}/{id}         → replaced record
    DELETE /{collection}/{id}
    GET    /{collection}/options      → option records for selection controls
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from mfg_console.application.interfaces import MasterDataBackend
from mfg_console.domain.entities import MasterRecord
from mfg_console.domain.exceptions import EntityNotFoundError, MasterDataBackendError

logger = logging.getLogger(__name__)


class HttpMasterDataBackend(MasterDataBackend):
    """Infrastructure adapter — connects to the masters API.

    Uses an injected httpx.AsyncClient when given (connection pooling,
    tests with MockTransport); otherwise opens a short-lived client per call.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    def _url(self, collection: str, *parts: str) -> str:
        segments = [quote(collection, safe="")] + [quote(str(p), safe="") for p in parts]
        return f"{self._base_url}/{'/'.join(segments)}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(
        self,
        method: str,
        collection: str,
        *parts: str,
        json: Any = None,
        record_id: str | None = None,
    ) -> Any:
        """Send one request and decode its JSON body (None for empty bodies)."""
        url = self._url(collection, *parts)
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            try:
                response = await client.request(
                    method, url, json=json, headers={"Accept": "application/json"}
                )
            except httpx.HTTPError as exc:
                raise MasterDataBackendError(collection, 0, str(exc) or type(exc).__name__) from exc

            logger.debug("%s %s → %d", method, url, response.status_code)

            if response.status_code == 404 and record_id is not None:
                raise EntityNotFoundError(collection, record_id)
            if response.status_code >= 400:
                self._raise_backend_error(collection, response)
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise MasterDataBackendError(
                    collection, response.status_code, "response is not valid JSON"
                ) from exc
        finally:
            if should_close:
                await client.aclose()

    async def get_all(self, collection: str) -> list[MasterRecord]:
        data = await self._request("GET", collection)
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            data = data["data"]
        if not isinstance(data, list):
            raise MasterDataBackendError(
                collection, 200, f"expected a list of records, got {type(data).__name__}"
            )
        return data

    async def get_by_id(self, collection: str, record_id: str) -> MasterRecord:
        return await self._request("GET", collection, record_id, record_id=record_id)

    async def create(self, collection: str, record: MasterRecord) -> MasterRecord:
        created = await self._request("POST", collection, json=record)
        return created if isinstance(created, dict) else dict(record)

    async def update(
        self, collection: str, record_id: str, record: MasterRecord
    ) -> MasterRecord:
        updated = await self._request("PUT", collection, record_id, json=record, record_id=record_id)
        return updated if isinstance(updated, dict) else dict(record)

    async def delete(self, collection: str, record_id: str) -> None:
        await self._request("DELETE", collection, record_id, record_id=record_id)

    async def get_options(self, relation: str) -> Any:
        return await self._request("GET", relation, "options")

    @staticmethod
    def _raise_backend_error(collection: str, response: httpx.Response) -> None:
        """Raise MasterDataBackendError from a 4xx/5xx httpx Response."""
        try:
            data = response.json()
            message = data.get("detail") or data.get("message") or response.text
        except Exception:
            message = response.text

        raise MasterDataBackendError(
            collection=collection,
            status_code=response.status_code,
            message=str(message),
        )
