"""HTTP client for the book data providers."""
import logging
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Dict, Optional

import requests

from booksearch.errors import FetchTimeoutError, HttpError, NetworkError, ParseError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Accept": "application/json"}


class FetchClient:
    """Issues JSON GET requests with a bounded timeout. Never retries."""

    def __init__(self, timeout: float = 10):
        """
        Initialize the client.

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout

        # Create session for connection pooling
        self.session = requests.Session()
        self.session.headers.update(JSON_HEADERS)
        # Never store or send cookies
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    def fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a URL and decode its JSON body.

        Args:
            url: Request URL
            params: Query parameters, URL-encoded by requests

        Returns:
            Decoded JSON payload

        Raises:
            FetchTimeoutError: no response within the timeout
            HttpError: status outside the 2xx range
            NetworkError: connection-level failure
            ParseError: body is not valid JSON
        """
        logger.info(f"Request: {url} {params or ''}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        # ConnectTimeout is also a ConnectionError, so check timeouts first
        except requests.exceptions.Timeout as e:
            logger.warning(f"Timeout after {self.timeout}s: {url}")
            raise FetchTimeoutError(url, self.timeout) from e
        except requests.exceptions.RequestException as e:
            logger.warning(f"Connection error: {e}")
            raise NetworkError(str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"HTTP error ({response.status_code}) from {url}")
            raise HttpError(response.status_code, url)

        logger.info(f"Success: {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"Response from {url} is not valid JSON") from e

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
