"""
Pydantic models for book records held by the catalog.
Defines the Book schema and the catalog the server starts with.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class Book(BaseModel):
    """
    A single book in the catalog.

    Field names are snake_case in Python and camelCase on the wire
    (``publishedYear``); both spellings are accepted on input.
    """
    id: str = Field(..., description="Unique book identifier, assigned by the repository")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author(s)")
    isbn: str = Field(..., description="ISBN-10 or ISBN-13, hyphens and spaces allowed")
    published_year: int = Field(..., alias="publishedYear", description="Year of publication")
    available: bool = Field(default=True, description="Whether the book can be borrowed")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "1",
                "title": "The Pragmatic Programmer",
                "author": "Andy Hunt and Dave Thomas",
                "isbn": "978-0135957059",
                "publishedYear": 1999,
                "available": True
            }
        }
    }

    def to_api(self) -> Dict[str, Any]:
        """Serialize using the wire field names."""
        return self.model_dump(by_alias=True)


# Catalog loaded at process start; all changes are lost on restart
SEED_BOOKS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "title": "The Pragmatic Programmer",
        "author": "Andy Hunt and Dave Thomas",
        "isbn": "978-0135957059",
        "published_year": 1999,
        "available": True,
    },
    {
        "id": "2",
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "978-0132350884",
        "published_year": 2008,
        "available": True,
    },
    {
        "id": "3",
        "title": "Design Patterns",
        "author": "Erich Gamma, Richard Helm, Ralph Johnson, John Vlissides",
        "isbn": "978-0201633610",
        "published_year": 1994,
        "available": False,
    },
    {
        "id": "4",
        "title": "Refactoring",
        "author": "Martin Fowler",
        "isbn": "978-0134757599",
        "published_year": 2018,
        "available": True,
    },
    {
        "id": "5",
        "title": "Test Driven Development",
        "author": "Kent Beck",
        "isbn": "978-0321146530",
        "published_year": 2002,
        "available": True,
    },
    {
        "id": "6",
        "title": "The Art of Software Testing",
        "author": "Glenford J. Myers",
        "isbn": "978-1118031964",
        "published_year": 2011,
        "available": True,
    },
    {
        "id": "7",
        "title": "Continuous Delivery",
        "author": "Jez Humble and David Farley",
        "isbn": "978-0321601919",
        "published_year": 2010,
        "available": False,
    },
]
