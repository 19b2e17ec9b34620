"""Tests for parsing functions."""
import pytest

from booksearch.errors import ParseError
from booksearch.parse import (
    parse_google_book,
    parse_google_results,
    parse_google_volume,
    parse_open_library_book,
    decode_google_response,
)
from booksearch.schemas import GoogleVolume


def test_parse_google_volume_complete():
    """Test parsing a volume with all fields present."""
    item = {
        "id": "abc123",
        "volumeInfo": {
            "title": "Python Crash Course",
            "authors": ["Eric Matthes"],
            "publishedDate": "2019-05-03",
            "publisher": "No Starch Press",
            "description": "A great book",
            "pageCount": 544,
            "categories": ["Programming"],
            "language": "en",
            "imageLinks": {
                "thumbnail": "http://example.com/thumb.jpg"
            },
            "industryIdentifiers": [
                {"type": "ISBN_13", "identifier": "9781593279288"},
                {"type": "ISBN_10", "identifier": "1593279280"}
            ]
        }
    }

    book = parse_google_volume(GoogleVolume.model_validate(item))

    assert book.title == "Python Crash Course"
    assert book.authors == ("Eric Matthes",)
    assert book.publisher == "No Starch Press"
    assert book.pages == 544
    assert book.categories == ("Programming",)
    assert book.cover == "http://example.com/thumb.jpg"
    assert book.isbn == "9781593279288"
    assert book.source == "Google Books"


def test_parse_google_volume_missing_fields():
    """Test that missing optional fields stay absent and authors get a placeholder."""
    item = {
        "id": "xyz789",
        "volumeInfo": {
            "title": "Mystery Book"
        }
    }

    book = parse_google_volume(GoogleVolume.model_validate(item))

    assert book.title == "Mystery Book"
    assert book.authors == ("Unknown",)
    assert book.description is None
    assert book.pages is None
    assert book.publisher is None
    assert book.isbn is None
    assert book.categories is None
    assert book.cover is None


def test_parse_google_book_uses_queried_isbn():
    """ISBN lookups keep the ISBN that was asked for."""
    response = {
        "totalItems": 1,
        "items": [{
            "id": "1",
            "volumeInfo": {
                "title": "The Odyssey",
                "industryIdentifiers": [{"type": "ISBN_10", "identifier": "0140449132"}]
            }
        }]
    }

    book = parse_google_book(response, "9780140449136")

    assert book.title == "The Odyssey"
    assert book.isbn == "9780140449136"


def test_parse_google_book_no_items():
    """Test that a response without items means no match."""
    assert parse_google_book({"kind": "books#volumes", "totalItems": 0}, "9780140449136") is None


def test_parse_google_results_filters_untitled():
    """Test that one untitled record among four leaves three books."""
    response = {
        "items": [
            {"id": "1", "volumeInfo": {"title": "Book 1"}},
            {"id": "2", "volumeInfo": {"title": ""}},
            {"id": "3", "volumeInfo": {"title": "Book 3"}},
            {"id": "4", "volumeInfo": {"title": "Book 4"}}
        ]
    }

    books = parse_google_results(response)

    assert [book.title for book in books] == ["Book 1", "Book 3", "Book 4"]


def test_parse_google_results_volume_without_info():
    """A volume with no volumeInfo at all is dropped, not fatal."""
    books = parse_google_results({"items": [{"id": "1"}, {"id": "2", "volumeInfo": {"title": "Kept"}}]})

    assert len(books) == 1
    assert books[0].title == "Kept"


def test_parse_google_results_empty():
    assert parse_google_results({"totalItems": 0}) == []


@pytest.mark.parametrize("payload", [
    ["not", "an", "object"],
    {"items": "nope"},
    {"items": [{"volumeInfo": {"authors": "Single String"}}]},
])
def test_decode_google_response_malformed(payload):
    """Test that shape mismatches become ParseError."""
    with pytest.raises(ParseError):
        decode_google_response(payload)


def test_parse_open_library_book():
    """Test parsing an Open Library jscmd=data record."""
    response = {
        "ISBN:9780140449136": {
            "title": "The Odyssey",
            "authors": [{"name": "Homer", "url": "https://openlibrary.org/authors/OL1A"}],
            "publish_date": "2003",
            "publishers": [{"name": "Penguin Books"}, {"name": "Other"}],
            "number_of_pages": 416,
            "cover": {"small": "s.jpg", "medium": "m.jpg", "large": "l.jpg"},
            "notes": "Translated by E. V. Rieu"
        }
    }

    book = parse_open_library_book(response, "9780140449136")

    assert book.title == "The Odyssey"
    assert book.authors == ("Homer",)
    assert book.publisher == "Penguin Books"
    assert book.pages == 416
    assert book.cover == "l.jpg"
    assert book.description == "Translated by E. V. Rieu"
    assert book.isbn == "9780140449136"
    assert book.source == "Open Library"


def test_parse_open_library_book_text_objects():
    """Notes may be missing and description may be a typed text object."""
    response = {
        "ISBN:0140449132": {
            "title": "The Odyssey",
            "description": {"type": "/type/text", "value": "An epic poem"}
        }
    }

    book = parse_open_library_book(response, "0140449132")

    assert book.description == "An epic poem"
    assert book.authors == ("Unknown",)
    assert book.publisher is None


def test_parse_open_library_book_missing_key():
    assert parse_open_library_book({}, "9780140449136") is None


def test_parse_open_library_book_malformed():
    with pytest.raises(ParseError):
        parse_open_library_book({"ISBN:9780140449136": "not a record"}, "9780140449136")
