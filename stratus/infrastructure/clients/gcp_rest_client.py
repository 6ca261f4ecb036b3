"""
GCP Compute Engine REST Client

Architectural Intent:
- Implements GCPComputePort against the Compute Engine v1 REST API
- Returns the API's JSON untouched; mapping into UnifiedInstance belongs to
  the GCP adapter
- Translates HTTP / transport failures into the domain error taxonomy

Design Decisions:
- httpx.AsyncClient with a bearer token taken from GCPCredentials
- A transport can be injected (httpx.MockTransport in tests)
- aggregated_list_instances follows nextPageToken and merges the per-zone
  "items" maps of every page into one response

Endpoints used:
  GET    /projects/{project}/aggregated/instances
  POST   /projects/{project}/zones/{zone}/instances/{name}/start
  POST   /projects/{project}/zones/{zone}/instances/{name}/stop
  POST   /projects/{project}/zones/{zone}/instances/{name}/reset
  DELETE /projects/{project}/zones/{zone}/instances/{name}
"""

import logging
from typing import Any, Optional

import httpx

from stratus.domain.errors import (
    InstanceNotFoundError,
    MalformedResponseError,
    ProviderAPIError,
)
from stratus.infrastructure.credentials import GCPCredentials

logger = logging.getLogger(__name__)

COMPUTE_BASE_URL = "https://compute.googleapis.com/compute/v1"
_PROVIDER = "gcp"


class GCPRestComputeClient:
    """Compute Engine v1 client over httpx."""

    def __init__(
        self,
        credentials: GCPCredentials,
        base_url: str = COMPUTE_BASE_URL,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _project_url(self) -> str:
        return f"{self.base_url}/projects/{self.credentials.project_id}"

    def _instance_url(self, zone: str, name: str) -> str:
        return f"{self._project_url()}/zones/{zone}/instances/{name}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self.credentials.access_token}",
                "Accept": "application/json",
            },
            timeout=self.timeout_seconds,
            transport=self._transport,
        )

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        logger.debug("GCP %s %s params=%s", method, url, params)
        try:
            async with self._client() as client:
                response = await client.request(method, url, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _error_message(e.response)
            if status == 404:
                raise InstanceNotFoundError(_PROVIDER, message, status) from e
            raise ProviderAPIError(_PROVIDER, message, status) from e
        except httpx.HTTPError as e:
            raise ProviderAPIError(_PROVIDER, f"{type(e).__name__}: {e}") from e

        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"GCP returned non-JSON body for {url}") from e
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"GCP returned {type(payload).__name__} for {url}")
        return payload

    async def aggregated_list_instances(self) -> dict[str, Any]:
        url = f"{self._project_url()}/aggregated/instances"
        merged: dict[str, Any] = {"kind": "compute#instanceAggregatedList", "items": {}}
        page_token: Optional[str] = None
        pages = 0

        while True:
            params = {"pageToken": page_token} if page_token else None
            page = await self._request("GET", url, params=params)
            pages += 1
            items = page.get("items") or {}
            if not isinstance(items, dict):
                raise MalformedResponseError("GCP aggregated list 'items' is not an object")
            for scope, scoped in items.items():
                bucket = merged["items"].setdefault(scope, {"instances": []})
                bucket["instances"].extend((scoped or {}).get("instances") or [])
            page_token = page.get("nextPageToken")
            if not page_token:
                break

        logger.debug("GCP aggregated list fetched %d page(s)", pages)
        return merged

    async def start_instance(self, zone: str, name: str) -> dict[str, Any]:
        return await self._request("POST", f"{self._instance_url(zone, name)}/start")

    async def stop_instance(self, zone: str, name: str) -> dict[str, Any]:
        return await self._request("POST", f"{self._instance_url(zone, name)}/stop")

    async def reset_instance(self, zone: str, name: str) -> dict[str, Any]:
        return await self._request("POST", f"{self._instance_url(zone, name)}/reset")

    async def delete_instance(self, zone: str, name: str) -> dict[str, Any]:
        return await self._request("DELETE", self._instance_url(zone, name))


def _error_message(response: httpx.Response) -> str:
    """Pull the API's error message out of a Google error body when present."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"HTTP {response.status_code}: {error['message']}"
    return f"HTTP {response.status_code}: {response.reason_phrase}"
