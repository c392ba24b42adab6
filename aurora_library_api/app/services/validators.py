"""
Validation helpers for book identifiers and creation payloads.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date
from numbers import Real
from typing import Any, Optional

from ..core.errors import FieldTypeError, InvalidYearError, MissingFieldError

_UUID4_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_valid_id(value: Any) -> bool:
    """Return ``True`` if ``value`` is a canonical UUID version 4 string."""
    if not isinstance(value, str):
        return False
    return _UUID4_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class BookPayload:
    """A creation payload that passed validation, already normalised."""

    title: str
    author: str
    year: Optional[int]


def validate_book_payload(payload: Any) -> BookPayload:
    """Validate a creation payload and return its normalised form.

    The checks run in a fixed order and the first failing one wins:
    missing ``title``/``author``, then non-string ``title``/``author``,
    then blank ``title``/``author``, then an invalid ``year``.
    """
    if not isinstance(payload, dict):
        payload = {}
    title = payload.get("title")
    author = payload.get("author")
    year = payload.get("year")

    if not title or not author:
        raise MissingFieldError()
    if not isinstance(title, str) or not isinstance(author, str):
        raise FieldTypeError()
    if not title.strip() or not author.strip():
        raise MissingFieldError()

    return BookPayload(title=title.strip(), author=author.strip(), year=_validate_year(year))


def _validate_year(year: Any) -> Optional[int]:
    if year is None:
        return None
    # bool is a subclass of int but never a valid year
    if isinstance(year, bool) or not isinstance(year, Real):
        raise InvalidYearError()
    if not math.isfinite(year) or year != int(year):
        raise InvalidYearError()
    if year < 0 or year > date.today().year:
        raise InvalidYearError()
    return int(year)
