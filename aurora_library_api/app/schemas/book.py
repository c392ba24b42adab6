"""
Pydantic models for book data.

``BookRead`` documents the shape of a stored book in the OpenAPI
schema; the routes return stored records unchanged.  ``BookCreate``
documents the creation payload in the OpenAPI schema only: creation
requests are validated by ``services.validators`` so that each kind of
rejection surfaces as its own error message instead of a generic 422.
"""

from typing import Optional

from pydantic import BaseModel, Field


class BookCreate(BaseModel):
    """Schema for creating a book."""

    title: str = Field(..., examples=["Dune"])
    author: str = Field(..., examples=["Frank Herbert"])
    year: Optional[int] = Field(None, examples=[1965])


class BookRead(BaseModel):
    """Schema for reading a book from the API."""

    id: str = Field(..., examples=["3b241101-e2bb-4255-8caf-4136c566a962"])
    title: str
    author: str
    year: Optional[int] = None

    model_config = {
        "from_attributes": True,
    }


class BookDeleted(BaseModel):
    """Body returned after a successful deletion."""

    message: str
    book: BookRead


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
