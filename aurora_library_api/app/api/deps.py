"""FastAPI dependencies shared by the endpoint modules."""

from fastapi import Request

from ..services.book_service import BookService


def get_book_service(request: Request) -> BookService:
    """Return the ``BookService`` attached to the running application."""
    return request.app.state.book_service
