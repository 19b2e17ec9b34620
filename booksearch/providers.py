"""Provider adapters: build requests for, and parse responses from, book APIs."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from booksearch.models import Book, SearchMode
from booksearch.parse import (
    GOOGLE_BOOKS,
    OPEN_LIBRARY,
    parse_google_book,
    parse_google_results,
    parse_open_library_book,
)


@dataclass(frozen=True)
class RequestSpec:
    """Everything a fetch client needs to issue a GET."""
    url: str
    params: Dict[str, Any] = field(default_factory=dict)


class GoogleBooksProvider:
    """Primary provider, used for every search mode."""

    name = GOOGLE_BOOKS
    BASE_URL = "https://www.googleapis.com/books/v1/volumes"

    # Free-text qualifiers per mode; keyword searches are sent as-is
    QUALIFIERS = {
        SearchMode.ISBN: "isbn:",
        SearchMode.TITLE: "intitle:",
        SearchMode.AUTHOR: "inauthor:",
        SearchMode.KEYWORD: "",
    }

    def __init__(self, max_results: int = 20):
        self.max_results = min(max_results, 40)  # API limit

    def build_request(self, query: str, mode: SearchMode = SearchMode.ISBN) -> RequestSpec:
        """
        Build the volumes request for a query.

        Args:
            query: Cleaned ISBN or trimmed search text
            mode: Search mode selecting the qualifier

        Returns:
            RequestSpec; multi-result modes ask for ``max_results`` items
        """
        mode = SearchMode(mode)
        params: Dict[str, Any] = {"q": f"{self.QUALIFIERS[mode]}{query}"}
        if mode != SearchMode.ISBN:
            params["maxResults"] = self.max_results
        return RequestSpec(self.BASE_URL, params)

    def parse(self, raw: Any, isbn: str) -> Optional[Book]:
        return parse_google_book(raw, isbn)

    def parse_results(self, raw: Any) -> List[Book]:
        return parse_google_results(raw)


class OpenLibraryProvider:
    """Secondary provider, consulted only for ISBN lookups."""

    name = OPEN_LIBRARY
    BASE_URL = "https://openlibrary.org/api/books"

    def build_request(self, isbn: str) -> RequestSpec:
        return RequestSpec(
            self.BASE_URL,
            {"bibkeys": f"ISBN:{isbn}", "format": "json", "jscmd": "data"},
        )

    def parse(self, raw: Any, isbn: str) -> Optional[Book]:
        return parse_open_library_book(raw, isbn)


class _GoogleIsbnLookup:
    """Adapts the primary provider to the single-key ISBN interface."""

    def __init__(self, provider: GoogleBooksProvider):
        self.provider = provider
        self.name = provider.name

    def build_request(self, isbn: str) -> RequestSpec:
        return self.provider.build_request(isbn, SearchMode.ISBN)

    def parse(self, raw: Any, isbn: str) -> Optional[Book]:
        return self.provider.parse(raw, isbn)


def isbn_providers(primary: Optional[GoogleBooksProvider] = None) -> list:
    """ISBN lookup chain in priority order: primary first, then the registry fallback."""
    return [_GoogleIsbnLookup(primary or GoogleBooksProvider()), OpenLibraryProvider()]
