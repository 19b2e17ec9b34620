"""Search orchestration: validate, record history, query providers, report outcome."""
import logging
from typing import List, Optional, Sequence, Union

from booksearch.errors import BookSearchError, InvalidISBNError, InvalidModeError, MissingQueryError
from booksearch.history import HistoryStore
from booksearch.models import Book, SearchMode, SearchOutcome, SearchStatus
from booksearch.normalize import normalize_isbn, normalize_text, require_query, validate_isbn
from booksearch.providers import GoogleBooksProvider, isbn_providers

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No books found. Try a different query"
BUSY_MESSAGE = "A search is already in progress"


class _SearchFlow:
    """State shared by the sync and async services."""

    def __init__(
        self,
        client,
        history: HistoryStore,
        primary: Optional[GoogleBooksProvider] = None,
        isbn_chain: Optional[Sequence] = None
    ):
        """
        Args:
            client: Fetch client with a ``fetch(url, params)`` method
            history: Store that every submitted query is recorded in
            primary: Provider for title/author/keyword searches
            isbn_chain: ISBN providers in the order they are tried
        """
        self.client = client
        self.history = history
        self.primary = primary or GoogleBooksProvider()
        self.isbn_chain = list(isbn_chain) if isbn_chain is not None else isbn_providers(self.primary)

    def _submit(self, raw_query: str) -> str:
        """Validate the raw query and record it. Raises MissingQueryError."""
        query = require_query(raw_query)
        self.history.record(query)
        return query

    @staticmethod
    def _parse_mode(mode: Union[SearchMode, str]) -> SearchMode:
        try:
            return SearchMode(mode)
        except ValueError as e:
            raise InvalidModeError(mode) from e

    @staticmethod
    def _clean_isbn(query: str) -> str:
        isbn = normalize_isbn(query)
        if not validate_isbn(isbn):
            raise InvalidISBNError(query)
        return isbn

    @staticmethod
    def _outcome(mode: SearchMode, query: str, books: List[Book]) -> SearchOutcome:
        if not books:
            logger.info(f"No {mode.value} results for {query!r}")
            return SearchOutcome(mode, query, SearchStatus.EMPTY, message=NOT_FOUND_MESSAGE)

        logger.info(f"Found {len(books)} book(s) for {mode.value} {query!r}")
        return SearchOutcome(mode, query, SearchStatus.SUCCESS, tuple(books))

    @staticmethod
    def _failed(mode: Optional[SearchMode], query: str, error: Exception) -> SearchOutcome:
        if isinstance(error, BookSearchError):
            logger.warning(f"Search for {query!r} failed: {error}")
        else:
            logger.error(f"Unexpected error searching {query!r}", exc_info=error)

        if isinstance(error, MissingQueryError):
            message = str(error)
        else:
            message = f"Search failed: {error}"
        return SearchOutcome(mode, query, SearchStatus.FAILED, message=message)

    def _history_query(self, index: int) -> Optional[str]:
        try:
            return self.history[index]
        except IndexError:
            return None


class BookSearchService(_SearchFlow):
    """Runs one search at a time over a blocking FetchClient."""

    def search(self, mode: Union[SearchMode, str], raw_query: str) -> SearchOutcome:
        """
        Run a search and report its outcome. Never raises for search errors.

        Args:
            mode: SearchMode or its string value
            raw_query: Query as entered by the user

        Returns:
            SearchOutcome with status success, empty or failed
        """
        query = normalize_text(raw_query)
        try:
            mode = self._parse_mode(mode)
        except InvalidModeError as e:
            return self._failed(None, query, e)

        try:
            query = self._submit(raw_query)
            if mode == SearchMode.ISBN:
                books = self._search_isbn(query)
            else:
                books = self._search_text(mode, query)
        except Exception as e:
            return self._failed(mode, query, e)

        return self._outcome(mode, query, books)

    def search_from_history(self, index: int, mode: Union[SearchMode, str]) -> SearchOutcome:
        """Re-run the history entry at ``index`` (0 is the most recent)."""
        try:
            mode = self._parse_mode(mode)
        except InvalidModeError as e:
            return self._failed(None, "", e)

        query = self._history_query(index)
        if query is None:
            return SearchOutcome(mode, "", SearchStatus.FAILED,
                                 message=f"No history entry {index}")
        return self.search(mode, query)

    def _search_isbn(self, query: str) -> List[Book]:
        isbn = self._clean_isbn(query)

        for provider in self.isbn_chain:
            request = provider.build_request(isbn)
            try:
                book = provider.parse(self.client.fetch(request.url, request.params), isbn)
            except BookSearchError as e:
                logger.warning(f"{provider.name} lookup for {isbn} failed: {e}")
                continue

            if book is not None:
                return [book]
            logger.info(f"{provider.name} has no record for ISBN {isbn}")

        return []

    def _search_text(self, mode: SearchMode, query: str) -> List[Book]:
        request = self.primary.build_request(query, mode)
        return self.primary.parse_results(self.client.fetch(request.url, request.params))


class AsyncBookSearchService(_SearchFlow):
    """Async variant over AsyncFetchClient; overlapping searches are rejected."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def search(self, mode: Union[SearchMode, str], raw_query: str) -> SearchOutcome:
        """Same contract as BookSearchService.search."""
        query = normalize_text(raw_query)
        try:
            mode = self._parse_mode(mode)
        except InvalidModeError as e:
            return self._failed(None, query, e)

        if self._busy:
            logger.warning(f"Rejected {mode.value} search for {query!r} while busy")
            return SearchOutcome(mode, query, SearchStatus.FAILED, message=BUSY_MESSAGE)

        self._busy = True
        try:
            query = self._submit(raw_query)
            if mode == SearchMode.ISBN:
                books = await self._search_isbn(query)
            else:
                books = await self._search_text(mode, query)
        except Exception as e:
            return self._failed(mode, query, e)
        finally:
            self._busy = False

        return self._outcome(mode, query, books)

    async def search_from_history(self, index: int, mode: Union[SearchMode, str]) -> SearchOutcome:
        try:
            mode = self._parse_mode(mode)
        except InvalidModeError as e:
            return self._failed(None, "", e)

        query = self._history_query(index)
        if query is None:
            return SearchOutcome(mode, "", SearchStatus.FAILED,
                                 message=f"No history entry {index}")
        return await self.search(mode, query)

    async def _search_isbn(self, query: str) -> List[Book]:
        isbn = self._clean_isbn(query)

        # Providers are tried one after another, never concurrently
        for provider in self.isbn_chain:
            request = provider.build_request(isbn)
            try:
                book = provider.parse(await self.client.fetch(request.url, request.params), isbn)
            except BookSearchError as e:
                logger.warning(f"{provider.name} lookup for {isbn} failed: {e}")
                continue

            if book is not None:
                return [book]
            logger.info(f"{provider.name} has no record for ISBN {isbn}")

        return []

    async def _search_text(self, mode: SearchMode, query: str) -> List[Book]:
        request = self.primary.build_request(query, mode)
        return self.primary.parse_results(await self.client.fetch(request.url, request.params))
