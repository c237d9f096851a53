"""
In-memory catalog store.
Holds the book records and applies review mutations for authenticated users.
"""

import threading
from typing import Dict, List

import structlog

from .errors import AuthorNotFound, BookNotFound, ReviewNotFound, TitleNotFound
from .models import Book

logger = structlog.get_logger(__name__)


class CatalogStore:
    """
    Mapping of ISBN to Book with a mutable review map per book.

    Book metadata is read-only once loaded. Each book's review map has its
    own lock, so writers on different books never contend and a read of one
    book's reviews always sees a complete mutation.
    """

    def __init__(self, books: Dict[str, Book]):
        """
        Initialize the store.

        Args:
            books: Mapping of ISBN to Book, owned by the store from now on
        """
        self._books = dict(books)
        self._locks = {isbn: threading.Lock() for isbn in self._books}

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, isbn: str) -> bool:
        return isbn in self._books

    def _get(self, isbn: str) -> Book:
        book = self._books.get(isbn)
        if book is None:
            raise BookNotFound()
        return book

    def get_books(self) -> Dict[str, Book]:
        """Return a snapshot of the whole catalog."""
        result = {}
        for isbn, book in self._books.items():
            with self._locks[isbn]:
                result[isbn] = book.model_copy(deep=True)
        return result

    def get_book(self, isbn: str) -> Book:
        """
        Get a single book by ISBN.

        Raises:
            BookNotFound: If no book has this ISBN
        """
        book = self._get(isbn)
        with self._locks[isbn]:
            return book.model_copy(deep=True)

    def get_reviews(self, isbn: str) -> Dict[str, str]:
        """Return a copy of the reviews for one book."""
        book = self._get(isbn)
        with self._locks[isbn]:
            return dict(book.reviews)

    def find_by_author(self, author: str) -> List[Book]:
        """
        Books whose author matches exactly, ignoring case.

        Raises:
            AuthorNotFound: If nothing matches
        """
        wanted = author.lower()
        books = [b for b in self.get_books().values() if b.author.lower() == wanted]
        if not books:
            raise AuthorNotFound()
        return books

    def find_by_title(self, title: str) -> List[Book]:
        """
        Books whose title contains the given text, ignoring case.

        Raises:
            TitleNotFound: If nothing matches
        """
        wanted = title.lower()
        books = [b for b in self.get_books().values() if wanted in b.title.lower()]
        if not books:
            raise TitleNotFound()
        return books

    def add_or_modify_review(self, isbn: str, username: str, review: str) -> None:
        """
        Set the user's review for a book, replacing any earlier one.

        Args:
            isbn: Book identifier
            username: Authenticated reviewer
            review: Review text

        Raises:
            BookNotFound: If no book has this ISBN
        """
        book = self._get(isbn)
        with self._locks[isbn]:
            book.reviews[username] = review
        logger.info("Review saved", isbn=isbn, username=username)

    def delete_review(self, isbn: str, username: str) -> None:
        """
        Remove the user's review for a book.

        Raises:
            BookNotFound: If no book has this ISBN
            ReviewNotFound: If the user has no review on this book
        """
        book = self._get(isbn)
        with self._locks[isbn]:
            if username not in book.reviews:
                raise ReviewNotFound()
            del book.reviews[username]
        logger.info("Review deleted", isbn=isbn, username=username)
