"""
Top-level router of the API.

The welcome route is served at ``/`` and the book routes under
``/api/libros``.
"""

from fastapi import APIRouter

from .endpoints import books, welcome

router = APIRouter()

router.include_router(welcome.router, tags=["welcome"])
router.include_router(books.router, prefix="/api/libros", tags=["books"])
