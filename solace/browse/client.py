"""Async HTTP client for the advocates query endpoint."""
from __future__ import annotations

import logging

import httpx

from solace.config import settings
from solace.schemas import AdvocateDTO

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load advocates"


class AdvocatesClientError(Exception):
    """Raised when a page of advocates cannot be loaded."""

    def __init__(self, message: str = LOAD_FAILED_MESSAGE, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AdvocatesClient:
    """Thin wrapper over ``httpx.AsyncClient`` for ``GET /api/advocates``.

    Pass ``transport`` to route requests elsewhere (e.g. an ASGI app or a
    mock transport in tests).
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.browse.api_base_url,
            timeout=timeout or settings.browse.request_timeout,
            transport=transport,
        )

    async def fetch_page(self, term: str, page: int, page_size: int) -> list[AdvocateDTO]:
        """Fetch one page; raises AdvocatesClientError on any failure."""
        params = {"page": page, "pageSize": page_size, "search": term}
        try:
            response = await self._client.get("/api/advocates", params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Request for page {page} failed: {e}")
            raise AdvocatesClientError() from e

        if response.is_error:
            logger.warning(f"Page {page} returned HTTP {response.status_code}")
            raise AdvocatesClientError(status_code=response.status_code)

        payload = response.json()
        return [AdvocateDTO.model_validate(item) for item in payload.get("data", [])]

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AdvocatesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
