"""
Storage backends for the book collection.

The whole collection is the unit of storage: ``load`` returns every
book as a list of plain dictionaries and ``save`` replaces the stored
collection with the given list.  There is no partial update.

Two backends are provided.  ``FileBookStorage`` keeps the collection
in a single pretty printed JSON document and is used in production.
``InMemoryBookStorage`` keeps it in a private list and is meant for
tests.  The service receives one of them explicitly instead of
reaching for a global path.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from .errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

BookRecord = Dict[str, Any]


class BookStorage(ABC):
    """Interface shared by all storage backends."""

    @abstractmethod
    def load(self) -> List[BookRecord]:
        """Return the full collection.

        Raises ``StorageReadError`` if the collection cannot be read.
        """

    @abstractmethod
    def save(self, books: List[BookRecord]) -> None:
        """Replace the stored collection with ``books``.

        Raises ``StorageWriteError`` if the collection cannot be written.
        """


class FileBookStorage(BookStorage):
    """Persist the collection as a JSON array in a single file.

    Every call to ``save`` rewrites the file in full.  There is no
    locking and no atomic rename; callers that need to serialise
    read-modify-write cycles must do so themselves.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> List[BookRecord]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.error("Could not read books from %s: %s", self.path, exc)
            raise StorageReadError() from exc
        if not isinstance(data, list):
            logger.error("Books file %s does not contain a JSON array", self.path)
            raise StorageReadError()
        return data

    def save(self, books: List[BookRecord]) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(books, fh, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Could not write books to %s: %s", self.path, exc)
            raise StorageWriteError() from exc

    def ensure_exists(self) -> None:
        """Create the data file with an empty collection if it is missing."""
        if os.path.exists(self.path):
            return
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        logger.info("Creating empty books file at %s", self.path)
        self.save([])


class InMemoryBookStorage(BookStorage):
    """Keep the collection in memory.

    ``load`` and ``save`` copy the records so that a caller mutating the
    list it loaded does not change the stored collection until it saves.
    """

    def __init__(self, initial: Optional[Iterable[BookRecord]] = None) -> None:
        self._books: List[BookRecord] = copy.deepcopy(list(initial or []))

    def load(self) -> List[BookRecord]:
        return copy.deepcopy(self._books)

    def save(self, books: List[BookRecord]) -> None:
        self._books = copy.deepcopy(list(books))
