"""Clean and validate raw user queries."""
import re

from booksearch.errors import MissingQueryError

_NOT_ISBN_CHAR = re.compile(r"[^0-9X]", re.IGNORECASE)

ISBN_LENGTHS = (10, 13)


def normalize_isbn(raw: str) -> str:
    """
    Strip everything except digits and the check character X.

    Args:
        raw: ISBN as typed, possibly with hyphens or spaces

    Returns:
        Uppercased ISBN string
    """
    return _NOT_ISBN_CHAR.sub("", raw or "").upper()


def validate_isbn(isbn: str) -> bool:
    """True if the cleaned ISBN has 10 or 13 characters. Checksums are not verified."""
    return len(normalize_isbn(isbn)) in ISBN_LENGTHS


def normalize_text(raw: str) -> str:
    return (raw or "").strip()


def require_query(raw: str) -> str:
    """Return the trimmed query, raising MissingQueryError if nothing is left."""
    query = normalize_text(raw)
    if not query:
        raise MissingQueryError()
    return query
