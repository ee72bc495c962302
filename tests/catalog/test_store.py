"""
Tests for the in-memory bookstore store.
"""

import pytest

from catalog.models import Book, UserAccount
from catalog.seed import SEED_BOOKS
from catalog.store import BookstoreStore


def make_account(username: str) -> UserAccount:
    return UserAccount(username=username, password_hash="$2b$04$notarealhash")


class TestCatalog:
    """Book lookups."""

    def test_list_books_keeps_seed_order(self, store):
        assert [book.isbn for book in store.list_books()] == list(SEED_BOOKS.keys())

    def test_get_book_for_every_seeded_isbn(self, store):
        for isbn in SEED_BOOKS:
            assert store.get_book(isbn).isbn == isbn

    def test_get_unknown_book(self, store):
        assert store.get_book("does-not-exist") is None

    def test_find_by_author_ignores_case(self, store):
        lower = store.find_books_by_author("unknown")
        upper = store.find_books_by_author("UNKNOWN")

        assert len(lower) == 4
        assert [book.isbn for book in lower] == [book.isbn for book in upper]

    def test_find_by_author_is_exact(self, store):
        assert store.find_books_by_author("Austen") == []

    def test_find_by_title_ignores_case(self, store):
        books = store.find_books_by_title("pride AND prejudice")

        assert [book.isbn for book in books] == ["8"]

    def test_find_by_title_is_exact(self, store):
        assert store.find_books_by_title("Pride") == []

    def test_duplicate_isbn_rejected(self):
        books = [
            Book(isbn="1", title="A", author="X"),
            Book(isbn="1", title="B", author="Y"),
        ]
        with pytest.raises(ValueError):
            BookstoreStore(books=books)

    def test_book_count(self, store):
        assert store.book_count() == 10


class TestReviews:
    """Review mutations."""

    def test_set_review_creates_map(self, store):
        assert store.get_book("1").reviews is None

        reviews = store.set_review("1", "alice", "great")

        assert reviews == {"alice": "great"}
        assert store.get_book("1").reviews == {"alice": "great"}

    def test_set_review_is_idempotent(self, store):
        store.set_review("1", "alice", "great")
        reviews = store.set_review("1", "alice", "great")

        assert reviews == {"alice": "great"}

    def test_set_review_overwrites(self, store):
        store.set_review("1", "alice", "great")
        reviews = store.set_review("1", "alice", "meh")

        assert reviews == {"alice": "meh"}

    def test_set_review_unknown_isbn(self, store):
        assert store.set_review("nope", "alice", "great") is None

    def test_returned_reviews_are_a_copy(self, store):
        reviews = store.set_review("1", "alice", "great")
        reviews["mallory"] = "spam"

        assert "mallory" not in store.get_book("1").reviews

    def test_remove_review(self, store):
        store.set_review("1", "alice", "great")
        store.set_review("1", "bob", "fine")

        assert store.remove_review("1", "alice") == {"bob": "fine"}
        assert store.remove_review("1", "alice") is None

    def test_remove_review_without_map(self, store):
        assert store.remove_review("1", "alice") is None

    def test_remove_review_unknown_isbn(self, store):
        assert store.remove_review("nope", "alice") is None


class TestUserDirectory:
    """Registered accounts."""

    def test_add_user(self, store):
        assert store.is_username_available("alice")
        assert store.add_user(make_account("alice"))
        assert not store.is_username_available("alice")
        assert store.get_user("alice").username == "alice"

    def test_duplicate_user_not_added(self, store):
        store.add_user(make_account("alice"))

        assert not store.add_user(make_account("alice"))
        assert store.user_count() == 1

    def test_usernames_are_case_sensitive(self, store):
        store.add_user(make_account("alice"))

        assert store.is_username_available("Alice")

    def test_get_unknown_user(self, store):
        assert store.get_user("ghost") is None

    def test_preloaded_duplicate_users_rejected(self):
        with pytest.raises(ValueError):
            BookstoreStore(users=[make_account("alice"), make_account("alice")])
