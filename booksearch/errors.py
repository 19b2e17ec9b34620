"""Exception hierarchy for book searches."""
from typing import Optional


class BookSearchError(Exception):
    """Base class for every error a search can report."""


class ValidationError(BookSearchError):
    """The query was rejected before any network activity."""


class MissingQueryError(ValidationError):
    def __init__(self, message: str = "Please enter a search query"):
        super().__init__(message)


class InvalidISBNError(ValidationError):
    def __init__(self, isbn: str = ""):
        self.isbn = isbn
        super().__init__("Invalid ISBN format")


class InvalidModeError(ValidationError):
    def __init__(self, mode=None):
        self.mode = mode
        super().__init__(f"Unknown search mode: {mode!r}")


class TransportError(BookSearchError):
    """The HTTP exchange itself failed."""


class FetchTimeoutError(TransportError):
    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Request timed out after {timeout:g}s")


class HttpError(TransportError):
    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error {status_code}")


class NetworkError(TransportError):
    """Connection refused, DNS failure and other lower-level problems."""


class ParseError(BookSearchError):
    """A provider response could not be decoded into the expected shape."""
