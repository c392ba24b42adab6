"""
Service layer.

``BookService`` holds the business rules for the book collection and
talks to whichever storage backend it was built with; the API handlers
only translate between HTTP and the service.
"""

from .book_service import BookService  # noqa: F401
