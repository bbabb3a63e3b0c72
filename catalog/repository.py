"""
In-memory repository for book records.
Owns the book sequence and the identifier counter; nothing is persisted.
"""

import threading
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import structlog

from .models import Book, SEED_BOOKS

logger = structlog.get_logger(__name__)


class BookRepository:
    """
    In-memory store for book records.

    Identifiers are stringified values of a counter that only increases,
    so an identifier is never handed out twice even after deletions.
    Every operation holds a lock because FastAPI may run handlers on
    worker threads.
    """

    def __init__(self, books: Optional[Iterable[Dict[str, Any]]] = None, next_id: Optional[int] = None):
        """
        Initialize the repository.

        Args:
            books: Initial records (field names or wire aliases)
            next_id: First identifier to assign; defaults to one past the
                highest numeric identifier in ``books``
        """
        self._lock = threading.Lock()
        self._books: List[Book] = [Book(**item) for item in (books or [])]

        if next_id is None:
            numeric_ids = [int(book.id) for book in self._books if book.id.isdigit()]
            next_id = max(numeric_ids, default=0) + 1
        self._next_id = next_id

    @classmethod
    def seeded(cls) -> "BookRepository":
        """Create a repository loaded with the default catalog."""
        return cls(books=SEED_BOOKS)

    @property
    def next_id(self) -> int:
        """Identifier the next created book will receive."""
        return self._next_id

    def count(self) -> int:
        """Number of stored books."""
        with self._lock:
            return len(self._books)

    def list_all(self) -> List[Book]:
        """Return copies of all books in insertion order."""
        with self._lock:
            return [book.model_copy() for book in self._books]

    def get_by_id(self, book_id: str) -> Optional[Book]:
        """Return a copy of the book with this identifier, or None."""
        with self._lock:
            index = self._find_index(book_id)
            if index is None:
                return None
            return self._books[index].model_copy()

    def create(self, fields: Dict[str, Any]) -> Book:
        """
        Append a new book.

        Validation is the caller's job. ``published_year`` defaults to the
        current year and ``available`` to True when missing or None.

        Args:
            fields: title, author, isbn and optionally published_year, available

        Returns:
            The stored book
        """
        with self._lock:
            published_year = fields.get("published_year")
            available = fields.get("available")
            book = Book(
                id=str(self._next_id),
                title=fields.get("title"),
                author=fields.get("author"),
                isbn=fields.get("isbn"),
                published_year=published_year if published_year is not None else date.today().year,
                available=available if available is not None else True,
            )
            self._next_id += 1
            self._books.append(book)

        logger.info("Book created", book_id=book.id, title=book.title)
        return book.model_copy()

    def update(self, book_id: str, changes: Dict[str, Any]) -> Optional[Book]:
        """
        Merge changes over an existing book.

        Keys whose value is None are skipped and ``id`` is never replaced.

        Args:
            book_id: Identifier of the book to update
            changes: Fields to replace

        Returns:
            Updated book, or None if no book has this identifier
        """
        with self._lock:
            index = self._find_index(book_id)
            if index is None:
                return None

            current = self._books[index]
            merged = current.model_dump()
            merged.update({
                key: value for key, value in changes.items()
                if value is not None and key in merged and key != "id"
            })
            merged["id"] = current.id
            updated = Book(**merged)
            self._books[index] = updated

        logger.info("Book updated", book_id=book_id, fields=sorted(k for k, v in changes.items() if v is not None))
        return updated.model_copy()

    def delete(self, book_id: str) -> bool:
        """
        Remove a book.

        Returns:
            True if removed, False if no book has this identifier
        """
        with self._lock:
            index = self._find_index(book_id)
            if index is None:
                return False
            del self._books[index]

        logger.info("Book deleted", book_id=book_id)
        return True

    def _find_index(self, book_id: str) -> Optional[int]:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return None
