"""
Schedule API client

Thin HTTP layer over the Sveriges Radio API. Every request is bounded by a
timeout and every httpx failure is reported as a TransportError.
"""
import asyncio
import logging
from typing import Mapping

import httpx

from radioinfo.exceptions import TransportError


logger = logging.getLogger(__name__)


class SverigesRadioClient:
    """Fetches raw XML documents from the schedule API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        max_retries: int = 0,
        backoff_factor: float = 2.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_xml(self, path: str, params: Mapping[str, str] | None = None) -> bytes:
        """
        GET an API resource and return the raw XML body

        Retries only transient failures (timeouts, connection errors, 5xx),
        and only when max_retries > 0. 4xx responses fail immediately.

        Args:
            path: Resource path relative to the base URL (e.g. 'channels')
            params: Query parameters

        Returns:
            Response body bytes

        Raises:
            TransportError: If the request fails after all attempts
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        attempts = self.max_retries + 1
        last_error: Exception | None = None

        for attempt in range(attempts):
            try:
                logger.debug("GET %s params=%s", url, dict(params or {}))
                response = await self._client.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.content

            except httpx.RequestError as e:
                # Network errors (timeouts, connection failures) - retry
                last_error = e
                if attempt < attempts - 1:
                    await self._backoff(attempt, attempts, type(e).__name__)

            except httpx.HTTPStatusError as e:
                # HTTP errors - don't retry on 4xx (client error), retry on 5xx (server error)
                status = e.response.status_code
                if 400 <= status < 500:
                    logger.error("HTTP %s (client error) for %s", status, url)
                    raise TransportError(f"HTTP {status} from {url}") from e

                last_error = e
                if attempt < attempts - 1:
                    await self._backoff(attempt, attempts, f"HTTP {status} server error")

        logger.error("Request to %s failed after %s attempt(s): %s", url, attempts, last_error)
        raise TransportError(f"Request to {url} failed: {last_error}") from last_error

    async def _backoff(self, attempt: int, attempts: int, reason: str) -> None:
        wait_time = self.backoff_factor ** attempt
        logger.warning(
            "Request attempt %s/%s failed (%s). Retrying in %.1fs...",
            attempt + 1,
            attempts,
            reason,
            wait_time,
        )
        await asyncio.sleep(wait_time)
