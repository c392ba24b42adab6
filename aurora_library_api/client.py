"""Aurora Library API client.

A thin wrapper around the book endpoints using the ``requests``
library.  It exposes one method per operation:

* :meth:`LibraryAPI.welcome` – fetch the welcome message and endpoint list.
* :meth:`LibraryAPI.list_books` – return every stored book.
* :meth:`LibraryAPI.get_book` – fetch a single book by its identifier.
* :meth:`LibraryAPI.create_book` – create a new book.
* :meth:`LibraryAPI.delete_book` – delete a book and return it.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with the keys ``status_code`` and ``message``.  ``status_code`` is
``None`` when the request never reached the server.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

BOOKS_PATH = "/api/libros"


class LibraryAPI:
    """Client for interacting with the Aurora Library API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)`` as described in the module
            docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Book operations
    # ------------------------------------------------------------------
    def welcome(self) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Return the welcome payload served at the root URL."""
        return self._request("GET", "/")

    def list_books(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all books.

        Returns:
            A tuple ``(books, error)``.  ``books`` is empty on failure.
        """
        data, error = self._request("GET", BOOKS_PATH)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def get_book(self, book_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve a single book by ID."""
        return self._request("GET", f"{BOOKS_PATH}/{book_id}")

    def create_book(
        self, title: str, author: str, year: Optional[int] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Create a book.

        ``year`` is only sent when given.
        """
        payload: Dict[str, Any] = {"title": title, "author": author}
        if year is not None:
            payload["year"] = year
        return self._request("POST", BOOKS_PATH, json_body=payload)

    def delete_book(self, book_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Delete a book.

        Returns:
            A tuple ``(book, error)`` where ``book`` is the deleted record.
        """
        data, error = self._request("DELETE", f"{BOOKS_PATH}/{book_id}")
        if error:
            return None, error
        if isinstance(data, dict):
            return data.get("book"), None
        return None, None
