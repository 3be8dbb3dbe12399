"""
HTTP retrieval of documentation pages.
"""

from __future__ import annotations

import logging

import httpx

from ..config import DocsCrawlerSettings, get_settings
from ..exceptions import FetchError
from ..models.crawl import FetchResponse
from .resilience import exponential_backoff

logger = logging.getLogger(__name__)


class HttpFetcher:
    """
    Fetches pages with httpx, following redirects.

    Transport errors are retried with exponential backoff and then raised
    as ``FetchError``. Non-2xx answers are returned, not raised; the caller
    decides what to keep.
    """

    def __init__(
        self,
        config: DocsCrawlerSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_connections: int | None = None,
    ) -> None:
        self.config = config or get_settings()
        self._transport = transport
        self._max_connections = max_connections or self.config.max_concurrent_requests
        self.client = self._build_client()

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(
                self.config.request_timeout, connect=self.config.connect_timeout
            ),
            limits=httpx.Limits(
                max_keepalive_connections=self._max_connections,
                max_connections=self._max_connections * 2,
            ),
            headers={"User-Agent": self.config.crawl_user_agent},
            follow_redirects=True,
            transport=self._transport,
        )

    async def __aenter__(self) -> HttpFetcher:
        """Async context manager entry."""
        return self

    async def __aexit__(
        self, exc_type: type, exc_val: Exception, exc_tb: object
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def _ensure_client_open(self) -> None:
        if self.client.is_closed:
            logger.debug("HTTP client was closed, recreating...")
            self.client = self._build_client()

    async def _get(self, url: str) -> httpx.Response:
        return await self.client.get(url)

    async def fetch(self, url: str) -> FetchResponse:
        """GET ``url`` and describe the final response."""
        await self._ensure_client_open()
        get_with_retry = exponential_backoff(
            max_retries=self.config.fetch_max_retries,
            initial_delay=self.config.retry_initial_delay,
            max_delay=self.config.retry_max_delay,
            exponential_base=self.config.retry_exponential_base,
            exceptions=(httpx.TransportError,),
        )(self._get)

        try:
            response = await get_with_retry(url)
        except httpx.TimeoutException as e:
            raise FetchError(url, f"timed out ({type(e).__name__})") from e
        except httpx.HTTPError as e:
            raise FetchError(url, f"{type(e).__name__}: {e}") from e

        effective_url = url
        if response.history:
            effective_url = str(response.url)
            logger.debug(f"{url} redirected to {effective_url}")

        return FetchResponse(
            url=url,
            effective_url=effective_url,
            status=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )
