"""
Bundled book dataset used to seed the catalog store.

A JSON file with the same shape (``{isbn: {author, title, reviews}}``) can be
supplied instead through the ``books_file`` setting.
"""

import json
from pathlib import Path
from typing import Dict, Optional

import structlog

from .models import Book

logger = structlog.get_logger(__name__)


BOOKS = {
    "1": {"author": "Chinua Achebe", "title": "Things Fall Apart", "reviews": {}},
    "2": {"author": "Hans Christian Andersen", "title": "Fairy tales", "reviews": {}},
    "3": {"author": "Dante Alighieri", "title": "The Divine Comedy", "reviews": {}},
    "4": {"author": "Unknown", "title": "The Epic Of Gilgamesh", "reviews": {}},
    "5": {"author": "Unknown", "title": "The Book Of Job", "reviews": {}},
    "6": {"author": "Unknown", "title": "One Thousand and One Nights", "reviews": {}},
    "7": {"author": "Unknown", "title": "Njál's Saga", "reviews": {}},
    "8": {"author": "Jane Austen", "title": "Pride and Prejudice", "reviews": {}},
    "9": {"author": "Honoré de Balzac", "title": "Le Père Goriot", "reviews": {}},
    "10": {"author": "Samuel Beckett", "title": "Molloy, Malone Dies, The Unnamable, the trilogy", "reviews": {}},
}


def load_books(books_file: Optional[Path] = None) -> Dict[str, Book]:
    """
    Build fresh Book records for a new catalog store.

    Args:
        books_file: Optional JSON file overriding the bundled dataset

    Returns:
        Mapping of ISBN to Book
    """
    raw = BOOKS
    if books_file:
        with open(books_file, "r", encoding="utf-8") as f:
            raw = json.load(f)
        logger.info("Loaded books file", path=str(books_file), count=len(raw))

    return {str(isbn): Book(**entry) for isbn, entry in raw.items()}
