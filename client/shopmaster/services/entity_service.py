# Overview: HTTP client for the POS API's customer and supplier endpoints.

"""
Entity Service

WHY: The POS API owns customers and suppliers; the console only holds a
cached copy. This module is the single place that speaks the API's
request/response contract, so the roster and form layers only ever see
ServiceResponse objects.

CONTRACT:
- Every API reply is a JSON envelope {success, data?, message?}
- success: false is a normal outcome carrying a human-readable message
- Transport failures (connection refused, timeouts) and non-2xx replies
  without an envelope are mapped to the operation's generic message
- No retries: a failed call is reported once and the caller may retry
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..models import EntityKind, EntityRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceResponse:
    success: bool
    data: Any = None
    message: str | None = None
    status_code: int | None = None


class EntityService:
    """
    Async client for one entity kind on the POS API.

    Usable as an async context manager; a client passed in is borrowed and
    left open, otherwise the service owns (and closes) its own.

    Args:
        kind: EntityKind.CUSTOMER or EntityKind.SUPPLIER
        base_url: API root, e.g. "http://localhost:5000/api"
        client: optional shared httpx.AsyncClient
        transport: optional httpx transport for an owned client
    """

    def __init__(
        self,
        kind: EntityKind,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.kind = kind
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "EntityService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/{self.kind.value}{path}"

    async def _call(
        self,
        method: str,
        path: str,
        fallback: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
    ) -> ServiceResponse:
        """
        Send one request and unwrap the API envelope.

        Never raises for network or protocol problems; they come back as
        ServiceResponse(success=False, message=fallback).
        """
        url = self._url(path)
        try:
            response = await self._client.request(method, url, json=json, params=params)
        except httpx.HTTPError:
            logger.exception("%s %s failed", method, url)
            return ServiceResponse(success=False, message=fallback)

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict) or "success" not in body:
            logger.warning("%s %s returned HTTP %s without an API envelope", method, url, response.status_code)
            return ServiceResponse(success=False, message=fallback, status_code=response.status_code)

        success = bool(body.get("success")) and response.is_success
        message = body.get("message")
        if not success:
            message = message or fallback
            logger.warning("%s %s rejected (HTTP %s): %s", method, url, response.status_code, message)

        return ServiceResponse(
            success=success,
            data=body.get("data"),
            message=message,
            status_code=response.status_code,
        )

    def _records(self, response: ServiceResponse, fallback: str) -> ServiceResponse:
        """Convert a list payload into EntityRecords."""
        if not response.success:
            return response
        try:
            records = [EntityRecord.from_dict(item) for item in (response.data or [])]
        except (TypeError, ValueError):
            logger.exception("Malformed %s list from the API", self.kind.value)
            return ServiceResponse(success=False, message=fallback, status_code=response.status_code)
        return ServiceResponse(True, records, response.message, response.status_code)

    def _record(self, response: ServiceResponse, fallback: str) -> ServiceResponse:
        """Convert a single-record payload; a missing payload is tolerated."""
        if not response.success or response.data is None:
            return response
        try:
            record = EntityRecord.from_dict(response.data)
        except ValueError:
            logger.exception("Malformed %s record from the API", self.kind.label.lower())
            return ServiceResponse(success=False, message=fallback, status_code=response.status_code)
        return ServiceResponse(True, record, response.message, response.status_code)

    async def list_all(self) -> ServiceResponse:
        """All records in server order (newest first on the POS API)."""
        fallback = f"Failed to fetch {self.kind.plural}"
        return self._records(await self._call("GET", "/", fallback), fallback)

    async def list_active(self) -> ServiceResponse:
        fallback = f"Failed to fetch active {self.kind.plural}"
        return self._records(await self._call("GET", "/active", fallback), fallback)

    async def search(self, query: str) -> ServiceResponse:
        """Server-side search over name, email and phone."""
        fallback = f"Failed to search {self.kind.plural}"
        response = await self._call("GET", "/search/query", fallback, params={"query": query})
        return self._records(response, fallback)

    async def get(self, record_id: str) -> ServiceResponse:
        fallback = f"Failed to fetch {self.kind.label.lower()}"
        return self._record(await self._call("GET", f"/{record_id}", fallback), fallback)

    async def create(self, draft: dict) -> ServiceResponse:
        fallback = f"Failed to add {self.kind.label.lower()}. Please try again."
        return self._record(await self._call("POST", "/add", fallback, json=draft), fallback)

    async def update(self, record_id: str, draft: dict) -> ServiceResponse:
        fallback = f"Failed to update {self.kind.label.lower()}. Please try again."
        return self._record(await self._call("PUT", f"/{record_id}", fallback, json=draft), fallback)

    async def toggle_status(self, record_id: str) -> ServiceResponse:
        """
        Flip active/inactive on the server.

        data is the status the server reports afterwards (None if the reply
        did not include it); the client never computes it.
        """
        fallback = f"Failed to update {self.kind.label.lower()} status"
        response = await self._call("PATCH", f"/{record_id}/toggle-status", fallback)
        if not response.success:
            return response

        status = response.data.get("status") if isinstance(response.data, dict) else None
        return ServiceResponse(True, status, response.message, response.status_code)

    async def statistics(self) -> ServiceResponse:
        fallback = f"Failed to fetch {self.kind.label.lower()} statistics"
        return await self._call("GET", "/statistics", fallback)
