"""
Pydantic models for the book catalog and the user directory.
"""

from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator


class Book(BaseModel):
    """
    A book in the catalog, keyed by ISBN.

    ``reviews`` stays ``None`` until the first review is written.
    """
    isbn: str = Field(..., min_length=1, description="Unique book identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    reviews: Optional[Dict[str, str]] = Field(None, description="Reviews keyed by username")

    @field_validator('isbn')
    @classmethod
    def validate_isbn(cls, v):
        """ISBN keys are used verbatim in URLs, so surrounding whitespace is rejected."""
        if v != v.strip():
            raise ValueError('ISBN must not have leading or trailing whitespace')
        return v


class UserAccount(BaseModel):
    """A registered customer. The password is only ever held as a bcrypt hash."""
    username: str = Field(..., min_length=1, description="Unique username")
    password_hash: str = Field(..., description="bcrypt password hash")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="When the account was registered")
