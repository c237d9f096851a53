"""
Unit tests for the catalog store and review mutations.
"""

import threading

import pytest

from catalog.database import CatalogStore
from catalog.errors import AuthorNotFound, BookNotFound, ReviewNotFound, TitleNotFound
from catalog.models import Book


class TestReadOperations:
    """Test cases for catalog lookups."""

    def test_get_books(self, catalog_store):
        books = catalog_store.get_books()

        assert len(books) == 10
        assert books["8"].title == "Pride and Prejudice"

    def test_get_book_not_found(self, catalog_store):
        with pytest.raises(BookNotFound):
            catalog_store.get_book("999")

    def test_get_book_returns_copy(self, catalog_store):
        """Test that callers cannot mutate reviews through a lookup."""
        book = catalog_store.get_book("1")
        book.reviews["mallory"] = "sneaky"

        assert catalog_store.get_reviews("1") == {}

    def test_find_by_author_ignores_case(self, catalog_store):
        books = catalog_store.find_by_author("jane AUSTEN")

        assert [b.title for b in books] == ["Pride and Prejudice"]

    def test_find_by_author_exact_match(self, catalog_store):
        """Test that author search does not match substrings."""
        with pytest.raises(AuthorNotFound):
            catalog_store.find_by_author("Austen")

    def test_find_by_author_many(self, catalog_store):
        books = catalog_store.find_by_author("unknown")

        assert len(books) == 4

    def test_find_by_title_substring(self, catalog_store):
        books = catalog_store.find_by_title("the")

        titles = [b.title for b in books]
        assert len(titles) == 4
        assert "The Divine Comedy" in titles
        assert "Molloy, Malone Dies, The Unnamable, the trilogy" in titles
        assert "Things Fall Apart" not in titles

    def test_find_by_title_not_found(self, catalog_store):
        with pytest.raises(TitleNotFound):
            catalog_store.find_by_title("Dune")


class TestReviewMutations:
    """Test cases for adding, modifying and deleting reviews."""

    def test_add_review(self, catalog_store):
        catalog_store.add_or_modify_review("1", "alice", "great book")

        assert catalog_store.get_reviews("1") == {"alice": "great book"}

    def test_modify_overwrites(self, catalog_store):
        """Test that a second review replaces the first."""
        catalog_store.add_or_modify_review("1", "alice", "r1")
        catalog_store.add_or_modify_review("1", "alice", "r2")

        assert catalog_store.get_reviews("1") == {"alice": "r2"}

    def test_add_is_repeatable(self, catalog_store):
        catalog_store.add_or_modify_review("1", "alice", "r1")
        catalog_store.add_or_modify_review("1", "alice", "r1")

        assert catalog_store.get_reviews("1") == {"alice": "r1"}

    def test_reviews_per_user(self, catalog_store):
        catalog_store.add_or_modify_review("1", "alice", "great")
        catalog_store.add_or_modify_review("1", "bob", "meh")

        assert catalog_store.get_reviews("1") == {"alice": "great", "bob": "meh"}

    def test_add_review_unknown_book(self, catalog_store):
        with pytest.raises(BookNotFound):
            catalog_store.add_or_modify_review("999", "alice", "great")

    def test_delete_review(self, catalog_store):
        catalog_store.add_or_modify_review("1", "alice", "great")
        catalog_store.add_or_modify_review("1", "bob", "meh")

        catalog_store.delete_review("1", "alice")

        assert catalog_store.get_reviews("1") == {"bob": "meh"}

    def test_delete_without_review(self, catalog_store):
        with pytest.raises(ReviewNotFound):
            catalog_store.delete_review("1", "alice")

    def test_delete_twice(self, catalog_store):
        """Test that deleting is not idempotent."""
        catalog_store.add_or_modify_review("1", "alice", "great")
        catalog_store.delete_review("1", "alice")

        with pytest.raises(ReviewNotFound):
            catalog_store.delete_review("1", "alice")

    def test_delete_unknown_book(self, catalog_store):
        with pytest.raises(BookNotFound):
            catalog_store.delete_review("999", "alice")

    def test_delete_other_users_review(self, catalog_store):
        """Test that a user cannot delete someone else's review."""
        catalog_store.add_or_modify_review("1", "bob", "meh")

        with pytest.raises(ReviewNotFound):
            catalog_store.delete_review("1", "alice")

        assert catalog_store.get_reviews("1") == {"bob": "meh"}

    def test_concurrent_writers(self):
        """Test that concurrent writers on one book all land."""
        store = CatalogStore({"1": Book(author="A", title="T")})
        usernames = [f"user{i}" for i in range(20)]

        threads = [
            threading.Thread(target=store.add_or_modify_review, args=("1", name, f"review by {name}"))
            for name in usernames
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        reviews = store.get_reviews("1")
        assert len(reviews) == 20
        assert reviews["user7"] == "review by user7"


class TestStore:
    """Test cases for store construction."""

    def test_len_and_contains(self, catalog_store):
        assert len(catalog_store) == 10
        assert "1" in catalog_store
        assert "999" not in catalog_store
