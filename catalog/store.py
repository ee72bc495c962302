"""
In-memory store for the book catalog and the user directory.

All state lives in process memory and is lost on restart. The store is
the only object that touches the underlying collections, so the query and
review services can be pointed at a persistent backend later without change.
"""

from typing import Dict, Iterable, List, Optional

import structlog

from catalog.models import Book, UserAccount

logger = structlog.get_logger(__name__)


class BookstoreStore:
    """Holds the books keyed by ISBN and the registered user accounts."""

    def __init__(self, books: Iterable[Book] = (), users: Iterable[UserAccount] = ()):
        """
        Initialize the store.

        Args:
            books: Books to preload, usually from the seed dataset
            users: Accounts to preload
        """
        self._books: Dict[str, Book] = {}
        self._users: List[UserAccount] = []

        for book in books:
            if book.isbn in self._books:
                raise ValueError(f"Duplicate ISBN in catalog: {book.isbn}")
            self._books[book.isbn] = book

        for account in users:
            if not self.add_user(account):
                raise ValueError(f"Duplicate username in directory: {account.username}")

        logger.debug("Store initialized", books=len(self._books), users=len(self._users))

    # Book catalog

    def list_books(self) -> List[Book]:
        return list(self._books.values())

    def get_book(self, isbn: str) -> Optional[Book]:
        return self._books.get(isbn)

    def find_books_by_author(self, author: str) -> List[Book]:
        """Books whose author equals ``author``, ignoring case."""
        wanted = author.casefold()
        return [book for book in self._books.values() if book.author.casefold() == wanted]

    def find_books_by_title(self, title: str) -> List[Book]:
        """Books whose title equals ``title``, ignoring case."""
        wanted = title.casefold()
        return [book for book in self._books.values() if book.title.casefold() == wanted]

    def book_count(self) -> int:
        return len(self._books)

    # Reviews

    def set_review(self, isbn: str, username: str, text: str) -> Optional[Dict[str, str]]:
        """
        Create or overwrite the review ``username`` wrote for a book.

        Returns:
            A copy of the book's reviews afterwards, or None if the ISBN is unknown
        """
        book = self._books.get(isbn)
        if book is None:
            return None

        if book.reviews is None:
            book.reviews = {}
        book.reviews[username] = text
        return dict(book.reviews)

    def remove_review(self, isbn: str, username: str) -> Optional[Dict[str, str]]:
        """
        Remove the review ``username`` wrote for a book.

        Returns:
            A copy of the remaining reviews, or None if there was nothing to remove
        """
        book = self._books.get(isbn)
        if book is None or not book.reviews or username not in book.reviews:
            return None

        del book.reviews[username]
        return dict(book.reviews)

    # User directory

    def is_username_available(self, username: str) -> bool:
        return all(account.username != username for account in self._users)

    def get_user(self, username: str) -> Optional[UserAccount]:
        for account in self._users:
            if account.username == username:
                return account
        return None

    def add_user(self, account: UserAccount) -> bool:
        """
        Append an account to the directory.

        Returns:
            True if added, False if the username is already taken
        """
        if not self.is_username_available(account.username):
            return False
        self._users.append(account)
        return True

    def user_count(self) -> int:
        return len(self._users)
