"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt

from catalog.models import Book


class BookCreate(BaseModel):
    """
    Body of ``POST /books``.

    Required fields are checked by the route so that a missing field yields
    the API's own error envelope instead of a schema error.
    """
    title: Optional[str] = Field(None, description="Book title (required)")
    author: Optional[str] = Field(None, description="Book author (required)")
    isbn: Optional[str] = Field(None, description="ISBN-10 or ISBN-13 (required)")
    published_year: Optional[Union[StrictInt, StrictFloat]] = Field(
        None, alias="publishedYear", description="Year of publication"
    )
    available: Optional[bool] = Field(None, description="Availability, defaults to true")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "title": "Working Effectively with Legacy Code",
                "author": "Michael Feathers",
                "isbn": "978-0131177055",
                "publishedYear": 2004
            }
        }
    }


class BookUpdate(BaseModel):
    """Body of ``PUT /books/{id}``; omitted or null fields keep their value."""
    title: Optional[str] = Field(None, description="New title")
    author: Optional[str] = Field(None, description="New author")
    isbn: Optional[str] = Field(None, description="New ISBN")
    published_year: Optional[Union[StrictInt, StrictFloat]] = Field(
        None, alias="publishedYear", description="New year of publication"
    )
    available: Optional[bool] = Field(None, description="New availability")

    model_config = {"populate_by_name": True}


class BookListResponse(BaseModel):
    """Response model for the book list."""
    success: bool = Field(True, description="Whether the request succeeded")
    count: int = Field(..., description="Number of books returned")
    data: List[Book] = Field(..., description="List of books")


class BookResponse(BaseModel):
    """Response model for a single book."""
    success: bool = Field(True, description="Whether the request succeeded")
    data: Book = Field(..., description="The book")


class BookMutationResponse(BaseModel):
    """Response model for a created or updated book."""
    success: bool = Field(True, description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable outcome")
    data: Book = Field(..., description="The stored book")


class BookDeleteResponse(BaseModel):
    """Response model for a deleted book."""
    success: bool = Field(True, description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable outcome")
    deleted_id: str = Field(..., alias="deletedId", description="Identifier of the removed book")

    model_config = {"populate_by_name": True}


class LoginRequest(BaseModel):
    """Body of ``POST /auth/login``."""
    username: Optional[str] = Field(None, description="Account name")
    password: Optional[str] = Field(None, description="Account password")


class UserInfo(BaseModel):
    """Identity embedded in a session token."""
    username: str = Field(..., description="Account name")
    role: str = Field(..., description="Account role")


class LoginResponse(BaseModel):
    """Response model for a successful login."""
    message: str = Field("Login successful", description="Human-readable outcome")
    token: str = Field(..., description="Signed JWT session token")
    expires_in: str = Field(..., alias="expiresIn", description="Token lifetime, e.g. 24h")
    user: UserInfo = Field(..., description="Authenticated identity")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Error response model; diagnostic extras such as ``received`` are kept."""
    error: str = Field(..., description="Error label")
    message: str = Field(..., description="Human-readable error message")

    model_config = {"extra": "allow"}


class NotFoundResponse(ErrorResponse):
    """Error response for unmatched routes."""
    available_endpoints: List[str] = Field(..., alias="availableEndpoints", description="Routes served by the API")

    model_config = {"extra": "allow", "populate_by_name": True}


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    uptime: float = Field(..., description="Seconds since the application started")
    environment: str = Field(..., description="Configured environment")
    version: str = Field(..., description="API version")


class RootResponse(BaseModel):
    """Directory of available endpoints."""
    message: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
    endpoints: Dict[str, object] = Field(..., description="Endpoints grouped by area")
    documentation: str = Field(..., description="Where to find detailed documentation")
