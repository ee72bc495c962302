"""
Catalog package for the bookstore's in-memory state.

This package contains:
- Book and user account models
- The seed book dataset
- The in-memory store for books, reviews and registered users
"""

__version__ = "1.0.0"
