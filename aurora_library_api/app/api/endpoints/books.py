"""
Book endpoints.

CRUD routes (without update) over the book collection.  Handlers only
translate HTTP to service calls: validation, uniqueness and storage
failures are raised by ``BookService`` as ``BookStoreError`` subclasses
and turned into JSON error bodies by the handlers registered in
``main.create_app``.

Stored records are returned as they are found in the data file, so
the routes use ``response_model=None``; the schemas below only feed
the OpenAPI document.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from aurora_library_api.app.api.deps import get_book_service
from aurora_library_api.app.schemas.book import BookCreate, BookDeleted, BookRead, ErrorResponse
from aurora_library_api.app.services.book_service import BookService

router = APIRouter()

_ID_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@router.get("", response_model=None, responses={status.HTTP_200_OK: {"model": List[BookRead]}})
async def list_books(service: BookService = Depends(get_book_service)) -> List[Dict[str, Any]]:
    """Return every book in the order it was created."""
    return await service.list_books()


@router.get(
    "/{book_id}",
    response_model=None,
    responses={status.HTTP_200_OK: {"model": BookRead}, **_ID_ERRORS},
)
async def get_book(book_id: str, service: BookService = Depends(get_book_service)) -> Dict[str, Any]:
    """Retrieve a single book by its ID.

    Returns HTTP 400 if the ID is not a UUID4 and HTTP 404 if no book
    has that ID.
    """
    return await service.get_book(book_id)


@router.post(
    "",
    response_model=None,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {"model": BookRead},
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": BookCreate.model_json_schema()}},
        }
    },
)
async def create_book(
    payload: Any = Body(None),
    service: BookService = Depends(get_book_service),
) -> Dict[str, Any]:
    """Create a new book.

    ``title`` and ``author`` are required strings; ``year`` is optional
    and must lie between 0 and the current year.  A book with the same
    title (case-insensitive) and year is rejected with HTTP 409.
    """
    return await service.create_book(payload)


@router.delete(
    "/{book_id}",
    response_model=None,
    responses={status.HTTP_200_OK: {"model": BookDeleted}, **_ID_ERRORS},
)
async def delete_book(book_id: str, service: BookService = Depends(get_book_service)) -> Dict[str, Any]:
    """Delete a book and return it."""
    book = await service.delete_book(book_id)
    return {"message": "Libro eliminado correctamente", "book": book}
