"""
Route handlers for the Book Library API.

Reads are public. Creating, updating and deleting books require a valid
admin token, and request bodies are fully validated before the repository
is touched.
"""

import time
from datetime import datetime, timezone
from typing import Optional, Union

import structlog
from fastapi import APIRouter, Depends, Request, status

from catalog.repository import BookRepository
from catalog.validators import (
    MIN_PUBLISHED_YEAR, is_valid_isbn, is_valid_published_year, max_published_year
)
from library_api.auth import TokenService, get_token_service, require_admin
from library_api.errors import BadRequestError, BookNotFoundError
from library_api.models import (
    BookCreate, BookDeleteResponse, BookListResponse, BookMutationResponse,
    BookResponse, BookUpdate, HealthResponse, LoginRequest, LoginResponse,
    RootResponse, UserInfo
)

logger = structlog.get_logger(__name__)

INVALID_ISBN_MESSAGE = "Invalid ISBN format. ISBN should be 10 or 13 digits (hyphens and spaces allowed)"
ISBN_EXAMPLE = "978-0135957059"

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "POST /auth/login",
    "GET /books",
    "GET /books/:id",
    "POST /books",
    "PUT /books/:id",
    "DELETE /books/:id",
]

service_router = APIRouter(tags=["Service"])
auth_router = APIRouter(prefix="/auth", tags=["Auth"])
books_router = APIRouter(prefix="/books", tags=["Books"])


def get_repository(request: Request) -> BookRepository:
    """Repository owned by the running application."""
    return request.app.state.repository


def _check_published_year(value: Optional[Union[int, float]]) -> None:
    if value is not None and not is_valid_published_year(value):
        raise BadRequestError(
            f"Invalid publishedYear. Must be a number between {MIN_PUBLISHED_YEAR} and {max_published_year()}"
        )


# Service endpoints
@service_router.get("/", response_model=RootResponse)
async def root(request: Request):
    """Directory of available endpoints."""
    return RootResponse(
        message=request.app.state.settings.api_title,
        version=request.app.state.settings.api_version,
        endpoints={
            "auth": {
                "login": "POST /auth/login"
            },
            "books": {
                "getAll": "GET /books",
                "getById": "GET /books/:id",
                "create": "POST /books (requires auth)",
                "update": "PUT /books/:id (requires auth)",
                "delete": "DELETE /books/:id (requires auth)"
            },
            "health": "GET /health"
        },
        documentation="See /docs for interactive API documentation"
    )


@service_router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check endpoint."""
    settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        environment=settings.environment,
        version=settings.api_version
    )


# Auth endpoints
@auth_router.post("/login", response_model=LoginResponse)
async def login(
    payload: Optional[LoginRequest] = None,
    token_service: TokenService = Depends(get_token_service)
):
    """
    Exchange the admin credentials for a signed session token.

    - **username**: account name
    - **password**: account password
    """
    payload = payload or LoginRequest()
    if not payload.username or not payload.password:
        raise BadRequestError("Username and password are required")

    issued = token_service.issue(payload.username, payload.password)
    return LoginResponse(token=issued.token, expires_in=issued.expires_in, user=issued.user)


# Books endpoints
@books_router.get("", response_model=BookListResponse)
async def list_books(repository: BookRepository = Depends(get_repository)):
    """Get all books."""
    books = repository.list_all()
    return BookListResponse(count=len(books), data=books)


@books_router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: str, repository: BookRepository = Depends(get_repository)):
    """
    Get a single book by ID.

    - **book_id**: Book identifier
    """
    book = repository.get_by_id(book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return BookResponse(data=book)


@books_router.post("", response_model=BookMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: Optional[BookCreate] = None,
    repository: BookRepository = Depends(get_repository),
    user: UserInfo = Depends(require_admin)
):
    """
    Create a book.

    - **title**, **author**, **isbn**: required
    - **publishedYear**: defaults to the current year
    - **available**: defaults to true
    """
    payload = payload or BookCreate()
    if not payload.title or not payload.author or not payload.isbn:
        raise BadRequestError(
            "Missing required fields: title, author, and isbn are required",
            extra={
                "received": {
                    "title": bool(payload.title),
                    "author": bool(payload.author),
                    "isbn": bool(payload.isbn)
                }
            }
        )
    if not is_valid_isbn(payload.isbn):
        raise BadRequestError(INVALID_ISBN_MESSAGE, extra={"example": ISBN_EXAMPLE})
    _check_published_year(payload.published_year)

    book = repository.create(payload.model_dump())
    logger.info("Book created via API", book_id=book.id, username=user.username)
    return BookMutationResponse(message="Book created successfully", data=book)


@books_router.put("/{book_id}", response_model=BookMutationResponse)
async def update_book(
    book_id: str,
    payload: Optional[BookUpdate] = None,
    repository: BookRepository = Depends(get_repository),
    user: UserInfo = Depends(require_admin)
):
    """
    Update a book. Omitted or null fields keep their current value.

    - **book_id**: Book identifier
    """
    if repository.get_by_id(book_id) is None:
        raise BookNotFoundError(book_id)

    payload = payload or BookUpdate()
    if payload.isbn is not None and not is_valid_isbn(payload.isbn):
        raise BadRequestError(INVALID_ISBN_MESSAGE)
    _check_published_year(payload.published_year)

    book = repository.update(book_id, payload.model_dump(exclude_none=True))
    if book is None:
        # Removed by another request after the existence check
        raise BookNotFoundError(book_id)

    logger.info("Book updated via API", book_id=book_id, username=user.username)
    return BookMutationResponse(message="Book updated successfully", data=book)


@books_router.delete("/{book_id}", response_model=BookDeleteResponse)
async def delete_book(
    book_id: str,
    repository: BookRepository = Depends(get_repository),
    user: UserInfo = Depends(require_admin)
):
    """
    Delete a book.

    - **book_id**: Book identifier
    """
    if not repository.delete(book_id):
        raise BookNotFoundError(book_id)

    logger.info("Book deleted via API", book_id=book_id, username=user.username)
    return BookDeleteResponse(message="Book deleted successfully", deleted_id=book_id)
