"""
Gif Catalog Client — HTTP API Client
======================================

What:  Async wrapper around the /api/v1/gifs endpoints.
How:   httpx.AsyncClient with JSON headers. Every failure mode (transport
       error, non-2xx status, body that is not JSON) surfaces as
       NetworkError, so callers only have one thing to catch.
Who:   Used by GifsIndex; usable on its own from scripts.

No timeouts and no retries: a started request is awaited until it
completes or fails.
"""

import logging
from typing import Any, List, Mapping, Optional

import httpx
from pydantic import ValidationError as SchemaError

from gif_catalog.config import settings
from gif_catalog.exceptions import NetworkError
from gif_catalog.schemas.gif import GifResponse

logger = logging.getLogger(__name__)

GIFS_PATH = "/api/v1/gifs"

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class GifsApiClient:
    """
    Client for the gif catalog API.

    Args:
        base_url:  Server root, e.g. "http://localhost:8000". Defaults to
                   the API_BASE_URL setting.
        transport: Optional httpx transport; tests pass an ASGITransport
                   to talk to the app in-process.

    Use as an async context manager, or call `aclose()` when done.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=JSON_HEADERS,
            transport=transport,
            timeout=None,
        )

    async def __aenter__(self) -> "GifsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def list_gifs(self) -> List[GifResponse]:
        """GET /api/v1/gifs → gifs, most liked first."""
        body = await self._request("GET", GIFS_PATH)
        if not isinstance(body, list):
            raise NetworkError(message="Expected a JSON array of gifs")
        return [self._parse_gif(item) for item in body]

    async def create_gif(self, payload: Mapping[str, Any]) -> GifResponse:
        """
        POST /api/v1/gifs with `{"gif": payload}`.

        Returns the stored gif including its server-assigned id.
        """
        body = await self._request("POST", GIFS_PATH, json={"gif": dict(payload)})
        return self._parse_gif(body)

    async def get_gif(self, gif_id: int) -> GifResponse:
        """GET /api/v1/gifs/{gif_id}."""
        body = await self._request("GET", f"{GIFS_PATH}/{gif_id}")
        return self._parse_gif(body)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise NetworkError(
                message=f"{type(e).__name__}: {e}",
                context={"method": method, "path": path},
            ) from e

        if not response.is_success:
            raise NetworkError(
                message=f"{response.status_code} ({response.reason_phrase})",
                status_code=response.status_code,
                context={"method": method, "path": path},
            )

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(
                message="Response body is not valid JSON",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _parse_gif(data: Any) -> GifResponse:
        try:
            return GifResponse.model_validate(data)
        except SchemaError as e:
            raise NetworkError(message=f"Unexpected gif payload: {e.error_count()} error(s)") from e
