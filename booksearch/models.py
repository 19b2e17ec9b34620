"""Data models for books and search outcomes."""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Tuple, Dict, Any

UNKNOWN_AUTHOR = "Unknown"


class SearchMode(str, Enum):
    """Which field a query is matched against."""
    ISBN = "isbn"
    TITLE = "title"
    AUTHOR = "author"
    KEYWORD = "keyword"


class SearchStatus(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class Book:
    """Normalized, provider-independent book representation."""
    title: str
    source: str
    authors: Tuple[str, ...] = (UNKNOWN_AUTHOR,)
    publish_date: Optional[str] = None
    publisher: Optional[str] = None
    isbn: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    pages: Optional[int] = None
    categories: Optional[Tuple[str, ...]] = None
    cover: Optional[str] = None

    @property
    def authors_str(self) -> str:
        """Format authors as comma-separated string."""
        return ", ".join(self.authors) if self.authors else UNKNOWN_AUTHOR

    @property
    def categories_str(self) -> str:
        """Format categories as comma-separated string."""
        return ", ".join(self.categories) if self.categories else "None"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["authors"] = list(self.authors)
        data["categories"] = list(self.categories) if self.categories is not None else None
        return data


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one search invocation."""
    mode: Optional[SearchMode]
    query: str
    status: SearchStatus
    books: Tuple[Book, ...] = field(default_factory=tuple)
    message: Optional[str] = None

    @property
    def is_single(self) -> bool:
        return len(self.books) == 1
