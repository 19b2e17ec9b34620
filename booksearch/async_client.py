"""Async HTTP client for cooperative (asyncio) searches."""
import logging
from typing import Any, Dict, Optional

import httpx

from booksearch.client import JSON_HEADERS
from booksearch.errors import FetchTimeoutError, HttpError, NetworkError, ParseError

logger = logging.getLogger(__name__)


class AsyncFetchClient:
    """Async counterpart of FetchClient with the same error contract."""

    def __init__(
        self,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize async client.

        Args:
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(
            timeout=timeout,
            headers=JSON_HEADERS,
            transport=transport
        )

    async def fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a URL and decode its JSON body.

        On timeout httpx abandons the request and returns the connection to
        the pool before FetchTimeoutError is raised.
        """
        logger.info(f"Async request: {url} {params or ''}")

        try:
            response = await self.client.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout after {self.timeout}s: {url}")
            raise FetchTimeoutError(url, self.timeout) from e
        except httpx.RequestError as e:
            logger.warning(f"Connection error: {e}")
            raise NetworkError(str(e)) from e
        finally:
            # Requests never carry cookies from earlier responses
            self.client.cookies.clear()

        if not response.is_success:
            logger.error(f"HTTP error ({response.status_code}) from {url}")
            raise HttpError(response.status_code, url)

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"Response from {url} is not valid JSON") from e

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
