"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class BookResponse(BaseModel):
    """Book response model for API."""
    isbn: str = Field(..., description="Unique book identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    reviews: Optional[Dict[str, str]] = Field(None, description="Reviews keyed by username")


class ReviewsResponse(BaseModel):
    """Reviews of a single book."""
    reviews: Dict[str, str] = Field(..., description="Reviews keyed by username")


class CredentialsRequest(BaseModel):
    """Body of the register and login requests.

    Fields are optional so that missing values are reported as 400 by the
    services instead of 422 by request validation.
    """
    username: Optional[str] = Field(None, description="Username")
    password: Optional[str] = Field(None, description="Password")


class ReviewRequest(BaseModel):
    """Body of the add/update review request."""
    review: Optional[str] = Field(None, description="Review text")


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str = Field(..., description="Human readable result")


class LoginResponse(MessageResponse):
    """Successful login."""
    token: str = Field(..., description="Bearer token valid for one hour")


class ReviewChangeResponse(MessageResponse):
    """Result of adding, updating or deleting a review."""
    reviews: Dict[str, str] = Field(..., description="Reviews of the book after the change")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books: int = Field(..., description="Number of books in the catalog")
    users: int = Field(..., description="Number of registered users")
