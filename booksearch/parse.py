"""Parse and normalize provider API responses into Book records."""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pydantic
from pydantic import TypeAdapter

from booksearch.errors import ParseError
from booksearch.models import Book, UNKNOWN_AUTHOR
from booksearch.schemas import (
    GoogleVolume,
    GoogleVolumesResponse,
    OpenLibraryBook,
    OpenLibraryResponse,
    OpenLibraryText,
)

logger = logging.getLogger(__name__)

GOOGLE_BOOKS = "Google Books"
OPEN_LIBRARY = "Open Library"

_open_library_adapter = TypeAdapter(OpenLibraryResponse)


def _authors(names: Optional[Sequence[Optional[str]]]) -> Tuple[str, ...]:
    cleaned = tuple(name for name in (names or ()) if name)
    return cleaned or (UNKNOWN_AUTHOR,)


def _text(value: Union[str, OpenLibraryText, None]) -> Optional[str]:
    if isinstance(value, OpenLibraryText):
        return value.value
    return value


def decode_google_response(response_json: Any) -> GoogleVolumesResponse:
    """
    Validate a Google Books volumes response.

    Raises:
        ParseError: if the payload does not have the expected shape
    """
    try:
        return GoogleVolumesResponse.model_validate(response_json)
    except pydantic.ValidationError as e:
        raise ParseError(f"Malformed Google Books response: {e.error_count()} invalid field(s)") from e


def decode_open_library_response(response_json: Any) -> Dict[str, OpenLibraryBook]:
    """
    Validate an Open Library books API response.

    Raises:
        ParseError: if the payload does not have the expected shape
    """
    try:
        return _open_library_adapter.validate_python(response_json)
    except pydantic.ValidationError as e:
        raise ParseError(f"Malformed Open Library response: {e.error_count()} invalid field(s)") from e


def parse_google_volume(volume: GoogleVolume, isbn: Optional[str] = None) -> Book:
    """
    Convert one Google Books volume to a Book.

    Args:
        volume: Decoded volume record
        isbn: ISBN to attach; when omitted the first industry identifier is used

    Returns:
        Book (title may be empty, callers filter as needed)
    """
    info = volume.volumeInfo

    if isbn is None and info.industryIdentifiers:
        isbn = info.industryIdentifiers[0].identifier or None

    image_links = info.imageLinks
    cover = image_links.thumbnail if image_links else None

    return Book(
        title=info.title or "",
        authors=_authors(info.authors),
        publish_date=info.publishedDate,
        publisher=info.publisher,
        isbn=isbn,
        pages=info.pageCount,
        cover=cover,
        description=info.description,
        language=info.language,
        categories=tuple(info.categories) if info.categories is not None else None,
        source=GOOGLE_BOOKS,
    )


def parse_google_book(response_json: Any, isbn: str) -> Optional[Book]:
    """First volume of an ISBN lookup, or None if the provider found nothing."""
    response = decode_google_response(response_json)
    if not response.items:
        return None
    return parse_google_volume(response.items[0], isbn=isbn)


def parse_google_results(response_json: Any) -> List[Book]:
    """
    Parse a full Google Books search response.

    Args:
        response_json: Complete API response JSON

    Returns:
        Books in provider order, skipping records without a title
    """
    response = decode_google_response(response_json)
    books = []

    for volume in response.items:
        book = parse_google_volume(volume)
        if book.title:
            books.append(book)
        else:
            logger.debug(f"Skipping untitled volume {volume.id}")

    return books


def parse_open_library_book(response_json: Any, isbn: str) -> Optional[Book]:
    """
    Parse the Open Library record stored under ``ISBN:<isbn>``.

    Returns:
        Book or None if the key is absent
    """
    records = decode_open_library_response(response_json)
    record = records.get(f"ISBN:{isbn}")
    if record is None:
        return None

    publisher = record.publishers[0].name if record.publishers else None
    cover = record.cover.large if record.cover else None

    return Book(
        title=record.title or "",
        authors=_authors([author.name for author in record.authors or []]),
        publish_date=record.publish_date,
        publisher=publisher,
        isbn=isbn,
        pages=record.number_of_pages,
        cover=cover,
        description=_text(record.notes) or _text(record.description),
        language=record.language,
        source=OPEN_LIBRARY,
    )
