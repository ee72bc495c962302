"""
Service layer for the FastAPI application.

CatalogService answers the public, read-only book queries.
CustomerService handles registration, login and the review changes that
require a verified identity.
"""

from typing import Dict, List, Optional

import structlog

from api.auth import create_access_token, hash_password, verify_password
from api.errors import (
    AuthenticationFailedError, DuplicateUsernameError,
    InvalidInputError, NotFoundError
)
from catalog.models import Book, UserAccount
from catalog.store import BookstoreStore
from utilities.logger import AuditLogger

logger = structlog.get_logger(__name__)


class CatalogService:
    """Read-only queries against the book catalog."""

    def __init__(self, store: BookstoreStore):
        self.store = store

    async def list_books(self) -> List[Book]:
        """Get every book in the catalog."""
        return self.store.list_books()

    async def get_book_by_isbn(self, isbn: str) -> Book:
        """
        Get a single book by ISBN.

        Raises:
            NotFoundError: If no book has this ISBN
        """
        book = self.store.get_book(isbn)
        if book is None:
            logger.info("Book not found", isbn=isbn)
            raise NotFoundError("Book not found")
        return book

    async def get_books_by_author(self, author: str) -> List[Book]:
        """
        Get the books written by an author (case-insensitive exact match).

        Raises:
            NotFoundError: If the author has no books in the catalog
        """
        books = self.store.find_books_by_author(author)
        if not books:
            logger.info("No books by author", author=author)
            raise NotFoundError("Books by the author not found")
        return books

    async def get_books_by_title(self, title: str) -> List[Book]:
        """
        Get the books with a title (case-insensitive exact match).

        Raises:
            NotFoundError: If no book has this title
        """
        books = self.store.find_books_by_title(title)
        if not books:
            logger.info("No books with title", title=title)
            raise NotFoundError("Books with the title not found")
        return books

    async def get_reviews(self, isbn: str) -> Dict[str, str]:
        """
        Get the reviews of a book.

        A book that has never been reviewed has no reviews to return; once
        reviewed, its reviews stay readable even after all are deleted.

        Raises:
            NotFoundError: If the ISBN is unknown or the book was never reviewed
        """
        book = self.store.get_book(isbn)
        if book is None or book.reviews is None:
            logger.info("Review not found", isbn=isbn)
            raise NotFoundError("Review not found")
        return dict(book.reviews)


class CustomerService:
    """Registration, login and per-user review changes."""

    def __init__(self, store: BookstoreStore):
        self.store = store
        self.audit = AuditLogger("api.customers")

    async def is_username_available(self, username: str) -> bool:
        return self.store.is_username_available(username)

    async def register(self, username: Optional[str], password: Optional[str]) -> str:
        """
        Register a new customer.

        Args:
            username: Requested username
            password: Plain text password, stored only as a bcrypt hash

        Returns:
            Confirmation message

        Raises:
            InvalidInputError: If a field is missing or the password is too long
            DuplicateUsernameError: If the username is taken
        """
        if not username or not password:
            raise InvalidInputError("Username and password are required")

        if not await self.is_username_available(username):
            self.audit.log_registration(username, success=False, reason="duplicate")
            raise DuplicateUsernameError()

        account = UserAccount(username=username, password_hash=hash_password(password))

        # Re-checked on append for callers driving the store from several threads
        if not self.store.add_user(account):
            self.audit.log_registration(username, success=False, reason="duplicate")
            raise DuplicateUsernameError()

        self.audit.log_registration(username)
        return "User registered successfully"

    async def authenticate(self, username: str, password: str) -> bool:
        """
        Check a username and password.

        Unknown users and wrong passwords both return False; only the log
        tells them apart.
        """
        account = self.store.get_user(username)
        if account is None:
            self.audit.log_login(username, success=False, reason="unknown_user")
            return False

        if not verify_password(password, account.password_hash):
            self.audit.log_login(username, success=False, reason="wrong_password")
            return False

        return True

    async def login(self, username: Optional[str], password: Optional[str]) -> str:
        """
        Log a customer in.

        Returns:
            Bearer token valid for the configured lifetime

        Raises:
            InvalidInputError: If a field is missing
            AuthenticationFailedError: If the credentials do not match
            ConfigurationError: If no signing secret is configured
        """
        if not username or not password:
            raise InvalidInputError("Username and password are required")

        if not await self.authenticate(username, password):
            raise AuthenticationFailedError()

        token = create_access_token(username)
        self.audit.log_login(username)
        return token

    async def add_or_update_review(self, isbn: str, username: str, text: Optional[str]) -> Dict[str, str]:
        """
        Write or overwrite the caller's review of a book.

        Returns:
            All reviews of the book after the change

        Raises:
            InvalidInputError: If the review text is empty
            NotFoundError: If the ISBN is unknown
        """
        if not text:
            raise InvalidInputError("Review content is required")

        reviews = self.store.set_review(isbn, username, text)
        if reviews is None:
            raise NotFoundError("Book not found")

        self.audit.log_review_change(isbn, username, action="upsert", review_count=len(reviews))
        return reviews

    async def delete_review(self, isbn: str, username: str) -> Dict[str, str]:
        """
        Delete the caller's review of a book.

        Returns:
            The remaining reviews of the book

        Raises:
            NotFoundError: If the ISBN is unknown or the caller has no review on it
        """
        if self.store.get_book(isbn) is None:
            raise NotFoundError("Book not found")

        reviews = self.store.remove_review(isbn, username)
        if reviews is None:
            raise NotFoundError("Review not found for this user")

        self.audit.log_review_change(isbn, username, action="delete", review_count=len(reviews))
        return reviews
