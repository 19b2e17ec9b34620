"""Render books, search outcomes and history for the terminal or HTML."""
import json
from typing import List, Optional

from markupsafe import Markup, escape
from tabulate import tabulate

from booksearch.models import Book, SearchOutcome, SearchStatus

LANGUAGE_NAMES = {
    "ru": "Russian",
    "en": "English",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "zh": "Chinese",
    "ja": "Japanese",
}

FORMATS = ("table", "json", "compact", "html")


def fix_cover_url(url: Optional[str]) -> str:
    """Force https and ask Google Books for the larger, uncurled thumbnail."""
    if not url:
        return ""
    return (
        url.replace("http://", "https://", 1)
        .replace("&edge=curl", "")
        .replace("zoom=1", "zoom=2")
    )


def language_name(code: Optional[str]) -> Optional[str]:
    if not code:
        return None
    return LANGUAGE_NAMES.get(code, code)


def truncate_text(text: Optional[str], max_length: int = 300) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def _clip(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


def render_table(books: List[Book]) -> str:
    headers = ["Title", "Authors", "Published", "Publisher", "ISBN"]
    rows = [
        [
            _clip(book.title, 50),
            _clip(book.authors_str, 30),
            book.publish_date or "Unknown",
            _clip(book.publisher or "N/A", 25),
            book.isbn or "N/A",
        ]
        for book in books
    ]
    return tabulate(rows, headers=headers, tablefmt="grid")


def render_details(book: Book) -> str:
    """Key/value view of a single book."""
    rows = [
        ["Title", book.title],
        ["Authors", book.authors_str],
        ["Published", book.publish_date or "Not specified"],
        ["Publisher", book.publisher or "Not specified"],
        ["ISBN", book.isbn or "Not specified"],
        ["Pages", str(book.pages) if book.pages else "Not specified"],
        ["Language", language_name(book.language) or "Not specified"],
        ["Source", book.source],
    ]
    if book.categories:
        rows.append(["Categories", book.categories_str])
    if book.cover:
        rows.append(["Cover", fix_cover_url(book.cover)])
    if book.description:
        rows.append(["Description", truncate_text(book.description)])
    return tabulate(rows, tablefmt="plain", maxcolwidths=[None, 80])


def render_compact(books: List[Book]) -> str:
    return "\n".join(f"{i}. {book.title} - {book.authors_str}" for i, book in enumerate(books, 1))


def render_json(outcome: SearchOutcome) -> str:
    data = {
        "mode": outcome.mode.value if outcome.mode else None,
        "query": outcome.query,
        "status": outcome.status.value,
        "message": outcome.message,
        "books": [book.to_dict() for book in outcome.books],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def _html_cover(book: Book, css_class: str) -> Markup:
    if not book.cover:
        return Markup('<div class="no-cover">No cover</div>')
    return Markup(f'<img src="{escape(fix_cover_url(book.cover))}" alt="Cover" class="{css_class}">')


def _html_meta(label: str, value) -> Markup:
    shown = escape(str(value)) if value else "Not specified"
    return Markup(
        '<div class="meta-item">'
        f'<span class="meta-label">{label}</span>'
        f'<span class="meta-value">{shown}</span>'
        '</div>'
    )


def render_html_book(book: Book) -> Markup:
    """Detail card for one book. Every provider string is escaped."""
    parts = [
        Markup('<div class="book-info">'),
        _html_cover(book, "book-cover"),
        Markup('<div class="book-details">'),
        Markup(f"<h2>{escape(book.title)}</h2>"),
        Markup(f"<p><strong>Author:</strong> {escape(book.authors_str)}</p>"),
        Markup('<div class="book-meta">'),
        _html_meta("Published", book.publish_date),
        _html_meta("Publisher", book.publisher),
        _html_meta("ISBN", book.isbn),
        _html_meta("Pages", book.pages),
        _html_meta("Language", language_name(book.language)),
        _html_meta("Source", book.source),
        Markup("</div>"),
    ]
    if book.description:
        parts.append(Markup(f"<h4>Description</h4><p>{escape(truncate_text(book.description))}</p>"))
    if book.categories:
        parts.append(Markup(f"<h4>Categories</h4><p>{escape(book.categories_str)}</p>"))
    parts.append(Markup("</div></div>"))
    return Markup("\n").join(parts)


def render_html_grid(books: List[Book]) -> Markup:
    cards = []
    for book in books:
        # join escapes every plain-string part
        byline = Markup(" • ").join(part for part in (book.publish_date, book.publisher) if part)
        cards.append(Markup(
            '<div class="book-card">'
            f"{_html_cover(book, 'book-card-cover')}"
            f'<div class="book-card-title">{escape(book.title)}</div>'
            f'<div class="book-card-author">{escape(book.authors_str)}</div>'
            f'<div class="book-card-meta">{byline}</div>'
            "</div>"
        ))
    return Markup('<div class="book-grid">\n') + Markup("\n").join(cards) + Markup("\n</div>")


def render_html(outcome: SearchOutcome) -> Markup:
    if outcome.status != SearchStatus.SUCCESS:
        return Markup(f'<div class="error"><h3>Error</h3><p>{escape(outcome.message or "")}</p></div>')
    if outcome.is_single:
        header = Markup('<div class="success"><h3>Book found!</h3></div>')
        return header + Markup("\n") + render_html_book(outcome.books[0])
    header = Markup(f'<div class="success"><h3>Books found: {len(outcome.books)}</h3></div>')
    return header + Markup("\n") + render_html_grid(list(outcome.books))


def render_outcome(outcome: SearchOutcome, format_type: str = "table") -> str:
    """
    Render a search outcome.

    Args:
        outcome: Result of a search
        format_type: One of table, json, compact, html

    Returns:
        Text ready to print
    """
    if format_type == "json":
        return render_json(outcome)
    if format_type == "html":
        return render_html(outcome)

    if outcome.status != SearchStatus.SUCCESS:
        return outcome.message or ""

    books = list(outcome.books)
    if format_type == "compact":
        return render_compact(books)
    if outcome.is_single:
        return render_details(books[0])
    return f"Books found: {len(books)}\n" + render_table(books)


def render_history(entries: List[str]) -> str:
    if not entries:
        return "No recent searches"
    return tabulate(list(enumerate(entries)), headers=["#", "Query"], tablefmt="simple")
