"""
FastAPI main application for the Bookshop Review API.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

import structlog
from fastapi import FastAPI, HTTPException, Depends, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.auth import get_current_username
from api.config import config as api_config
from api.errors import BookstoreError
from api.models import (
    BookResponse, ReviewsResponse,
    CredentialsRequest, ReviewRequest,
    MessageResponse, LoginResponse, ReviewChangeResponse,
    ErrorResponse, HealthResponse
)
from api.services import CatalogService, CustomerService
from catalog.seed import load_seed_books
from catalog.store import BookstoreStore
from utilities.config import config
from utilities.logger import setup_logging

# Setup logging
logger = structlog.get_logger(__name__)

# Global services, created at startup
store: BookstoreStore = None
catalog_service: CatalogService = None
customer_service: CustomerService = None


def init_services(bookstore: Optional[BookstoreStore] = None) -> BookstoreStore:
    """
    Create the store and the services that share it.

    Args:
        bookstore: Store to use; a new one is built from the seed catalog when omitted

    Returns:
        The store the services were bound to
    """
    global store, catalog_service, customer_service

    if bookstore is None:
        bookstore = BookstoreStore(books=load_seed_books(config.get_seed_file_path()))

    store = bookstore
    catalog_service = CatalogService(store)
    customer_service = CustomerService(store)
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )
    logger.info("Starting Bookshop Review API")

    try:
        init_services()
        logger.info("Catalog loaded", books=store.book_count())
    except Exception as e:
        logger.error("Failed to load catalog", error=str(e))
        raise

    if not api_config.jwt_secret:
        logger.warning("JWT_SECRET is not set; login and review routes will fail")

    yield

    logger.info("Shutting down Bookshop Review API")


# Create FastAPI application
app = FastAPI(
    title=api_config.api_title,
    description=api_config.api_description,
    version=api_config.api_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=api_config.cors_allow_credentials,
    allow_methods=api_config.cors_allow_methods,
    allow_headers=api_config.cors_allow_headers,
)


# Exception handlers
@app.exception_handler(BookstoreError)
async def bookstore_exception_handler(request, exc: BookstoreError):
    """Handle errors raised by the services."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request failed", error=exc.message, error_type=type(exc).__name__, path=request.url.path)
    else:
        logger.warning("Request rejected", error=exc.message, error_type=type(exc).__name__, path=request.url.path)

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.message,
            status_code=exc.status_code
        ).model_dump(),
        headers=exc.headers
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=str(exc.detail),
            status_code=exc.status_code
        ).model_dump(),
        headers=exc.headers
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if api_config.debug else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).model_dump()
    )


def _catalog() -> CatalogService:
    if not catalog_service:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Catalog not available"
        )
    return catalog_service


def _customers() -> CustomerService:
    if not customer_service:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Customer service not available"
        )
    return customer_service


# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    ready = store is not None
    return HealthResponse(
        status="healthy" if ready else "unavailable",
        timestamp=datetime.utcnow(),
        version=api_config.api_version,
        books=store.book_count() if ready else 0,
        users=store.user_count() if ready else 0
    )


# Public catalog endpoints
@app.get("/", response_model=List[BookResponse], response_model_exclude_none=True, tags=["Books"])
async def list_books():
    """Get every book available in the shop."""
    books = await _catalog().list_books()
    return [BookResponse(**book.model_dump()) for book in books]


@app.get("/isbn/{isbn}", response_model=BookResponse, response_model_exclude_none=True, tags=["Books"])
async def get_book_by_isbn(isbn: str):
    """
    Get a single book by ISBN.

    - **isbn**: Book identifier
    """
    book = await _catalog().get_book_by_isbn(isbn)
    return BookResponse(**book.model_dump())


@app.get("/author/{author}", response_model=List[BookResponse], response_model_exclude_none=True, tags=["Books"])
async def get_books_by_author(author: str):
    """
    Get the books by an author.

    - **author**: Author name, matched exactly but ignoring case
    """
    books = await _catalog().get_books_by_author(author)
    return [BookResponse(**book.model_dump()) for book in books]


@app.get("/title/{title}", response_model=List[BookResponse], response_model_exclude_none=True, tags=["Books"])
async def get_books_by_title(title: str):
    """
    Get the books with a title.

    - **title**: Book title, matched exactly but ignoring case
    """
    books = await _catalog().get_books_by_title(title)
    return [BookResponse(**book.model_dump()) for book in books]


@app.get("/review/{isbn}", response_model=ReviewsResponse, tags=["Reviews"])
async def get_reviews(isbn: str):
    """
    Get the reviews of a book.

    - **isbn**: Book identifier
    """
    reviews = await _catalog().get_reviews(isbn)
    return ReviewsResponse(reviews=reviews)


# Customer endpoints
@app.post(
    "/customer/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Customers"]
)
async def register(body: Optional[CredentialsRequest] = None):
    """Register a new customer."""
    body = body or CredentialsRequest()
    message = await _customers().register(body.username, body.password)
    return MessageResponse(message=message)


@app.post("/customer/login", response_model=LoginResponse, tags=["Customers"])
async def login(body: Optional[CredentialsRequest] = None):
    """Log in and receive a bearer token valid for one hour."""
    body = body or CredentialsRequest()
    token = await _customers().login(body.username, body.password)
    return LoginResponse(message="Login successful", token=token)


@app.put("/customer/auth/review/{isbn}", response_model=ReviewChangeResponse, tags=["Reviews"])
async def put_review(
    isbn: str,
    body: Optional[ReviewRequest] = None,
    username: str = Depends(get_current_username)
):
    """
    Add or update your review of a book.

    - **isbn**: Book identifier
    """
    body = body or ReviewRequest()
    reviews = await _customers().add_or_update_review(isbn, username, body.review)
    return ReviewChangeResponse(message="Review added/updated successfully", reviews=reviews)


@app.delete("/customer/auth/review/{isbn}", response_model=ReviewChangeResponse, tags=["Reviews"])
async def delete_review(
    isbn: str,
    username: str = Depends(get_current_username)
):
    """
    Delete your review of a book.

    - **isbn**: Book identifier
    """
    reviews = await _customers().delete_review(isbn, username)
    return ReviewChangeResponse(message="Review deleted successfully", reviews=reviews)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=True,
        log_level="info"
    )
