"""
Service layer for books.

Each operation reads the whole collection from the storage backend,
works on the in-memory list and, for mutations, writes the whole list
back.  Nothing is cached between calls.  Stored records are handed
back exactly as they were loaded; the creation rules only apply to new
books.

Storage calls run in the threadpool so file I/O does not block the
event loop.  Creation and deletion hold a lock owned by the service
instance for their whole read-modify-write cycle, so two concurrent
mutations handled by the same process cannot overwrite each other's
changes.  Reads do not take the lock.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, List, Optional

from starlette.concurrency import run_in_threadpool

from ..core.errors import DuplicateError, InvalidIdError, NotFoundError
from ..core.storage import BookRecord, BookStorage
from .validators import is_valid_id, validate_book_payload

logger = logging.getLogger(__name__)


class BookService:
    """Service class for managing the book collection."""

    def __init__(self, storage: BookStorage) -> None:
        self.storage = storage
        self._write_lock = asyncio.Lock()

    async def _load(self) -> List[BookRecord]:
        return await run_in_threadpool(self.storage.load)

    async def _save(self, books: List[BookRecord]) -> None:
        await run_in_threadpool(self.storage.save, books)

    async def list_books(self) -> List[BookRecord]:
        """Return every stored book in insertion order."""
        return await self._load()

    async def get_book(self, book_id: str) -> BookRecord:
        """Retrieve a single book by its identifier.

        Raises ``InvalidIdError`` if ``book_id`` is not a UUID4 and
        ``NotFoundError`` if no stored book has that identifier.
        """
        if not is_valid_id(book_id):
            raise InvalidIdError()
        book = self._find(await self._load(), book_id)
        if book is None:
            raise NotFoundError()
        return book

    async def create_book(self, payload: Any) -> BookRecord:
        """Validate ``payload``, append a new book and persist the collection.

        A book is a duplicate when an existing book has the same title
        (case-insensitive) and the same year.  Two missing years are
        considered equal.
        """
        data = validate_book_payload(payload)
        wanted_title = data.title.lower()
        async with self._write_lock:
            books = await self._load()
            for book in books:
                title = book.get("title")
                if isinstance(title, str) and title.lower() == wanted_title and book.get("year") == data.year:
                    raise DuplicateError()
            new_book: BookRecord = {
                "id": str(uuid.uuid4()),
                "title": data.title,
                "author": data.author,
                "year": data.year,
            }
            books.append(new_book)
            await self._save(books)
        logger.info("Created book %s (%s)", new_book["id"], new_book["title"])
        return new_book

    async def delete_book(self, book_id: str) -> BookRecord:
        """Remove the first book with ``book_id`` and persist the collection.

        Returns the removed record.
        """
        if not is_valid_id(book_id):
            raise InvalidIdError()
        async with self._write_lock:
            books = await self._load()
            index = next((i for i, book in enumerate(books) if book.get("id") == book_id), None)
            if index is None:
                raise NotFoundError()
            deleted = books.pop(index)
            await self._save(books)
        logger.info("Deleted book %s", book_id)
        return deleted

    @staticmethod
    def _find(books: List[BookRecord], book_id: str) -> Optional[BookRecord]:
        return next((book for book in books if book.get("id") == book_id), None)
