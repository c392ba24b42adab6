import asyncio
import time
import uuid

import pytest

from aurora_library_api.app.core.errors import (
    DuplicateError,
    FieldTypeError,
    InvalidIdError,
    MissingFieldError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
)
from aurora_library_api.app.core.storage import BookStorage, InMemoryBookStorage
from aurora_library_api.app.services.book_service import BookService
from aurora_library_api.app.services.validators import is_valid_id

EXISTING = {"id": "3b241101-e2bb-4255-8caf-4136c566a962", "title": "Dune", "author": "Frank Herbert", "year": 1965}


def run(coro):
    return asyncio.run(coro)


class SlowStorage(InMemoryBookStorage):
    """Loads take long enough for concurrent mutations to overlap."""

    def load(self):
        books = super().load()
        time.sleep(0.05)
        return books


class FailingStorage(BookStorage):
    def __init__(self, fail_on="load"):
        self.fail_on = fail_on

    def load(self):
        if self.fail_on == "load":
            raise StorageReadError()
        return []

    def save(self, books):
        raise StorageWriteError()


@pytest.fixture
def storage():
    return InMemoryBookStorage()


@pytest.fixture
def service(storage):
    return BookService(storage)


class TestCreateBook:
    def test_returns_book_with_fresh_valid_id(self, service, storage):
        book = run(service.create_book({"title": " Dune ", "author": " Herbert ", "year": 1965}))
        assert is_valid_id(book["id"])
        assert book == {"id": book["id"], "title": "Dune", "author": "Herbert", "year": 1965}
        assert storage.load() == [book]

    def test_ids_are_unique(self, service):
        ids = {run(service.create_book({"title": f"Book {i}", "author": "A"}))["id"] for i in range(20)}
        assert len(ids) == 20

    def test_absent_year_is_stored_as_null(self, service, storage):
        book = run(service.create_book({"title": "Dune", "author": "Herbert"}))
        assert book["year"] is None
        assert storage.load()[0]["year"] is None

    def test_appends_in_creation_order(self, service):
        first = run(service.create_book({"title": "One", "author": "A"}))
        second = run(service.create_book({"title": "Two", "author": "B"}))
        assert [b["id"] for b in run(service.list_books())] == [first["id"], second["id"]]

    def test_duplicate_title_ignores_case(self):
        service = BookService(InMemoryBookStorage([EXISTING]))
        with pytest.raises(DuplicateError):
            run(service.create_book({"title": "dUNE", "author": "Someone else", "year": 1965}))

    def test_duplicate_check_uses_trimmed_title(self):
        service = BookService(InMemoryBookStorage([EXISTING]))
        with pytest.raises(DuplicateError):
            run(service.create_book({"title": "  Dune  ", "author": "Herbert", "year": 1965}))

    def test_same_title_different_year_is_allowed(self):
        storage = InMemoryBookStorage([EXISTING])
        service = BookService(storage)
        run(service.create_book({"title": "Dune", "author": "Herbert", "year": 1984}))
        assert len(storage.load()) == 2

    def test_two_missing_years_are_duplicates(self, service):
        run(service.create_book({"title": "Dune", "author": "Herbert"}))
        with pytest.raises(DuplicateError):
            run(service.create_book({"title": "DUNE", "author": "Herbert", "year": None}))

    def test_missing_year_does_not_match_given_year(self):
        service = BookService(InMemoryBookStorage([EXISTING]))
        book = run(service.create_book({"title": "Dune", "author": "Herbert"}))
        assert book["year"] is None

    def test_validation_runs_before_storage(self):
        service = BookService(FailingStorage("load"))
        with pytest.raises(MissingFieldError):
            run(service.create_book({"title": "Dune"}))
        with pytest.raises(FieldTypeError):
            run(service.create_book({"title": "Dune", "author": 3}))

    def test_nothing_persisted_on_duplicate(self):
        storage = InMemoryBookStorage([EXISTING])
        service = BookService(storage)
        with pytest.raises(DuplicateError):
            run(service.create_book({"title": "Dune", "author": "Herbert", "year": 1965}))
        assert storage.load() == [EXISTING]

    def test_write_failure_propagates(self):
        service = BookService(FailingStorage("save"))
        with pytest.raises(StorageWriteError):
            run(service.create_book({"title": "Dune", "author": "Herbert"}))

    def test_concurrent_creates_do_not_lose_updates(self):
        storage = SlowStorage()
        service = BookService(storage)

        async def create_many():
            await asyncio.gather(
                *(service.create_book({"title": f"Book {i}", "author": "A"}) for i in range(5))
            )

        run(create_many())
        assert sorted(b["title"] for b in storage.load()) == [f"Book {i}" for i in range(5)]

    def test_concurrent_create_and_delete_keep_both_changes(self):
        storage = SlowStorage([EXISTING])
        service = BookService(storage)

        async def mutate():
            await asyncio.gather(
                service.delete_book(EXISTING["id"]),
                service.create_book({"title": "Emma", "author": "Austen"}),
            )

        run(mutate())
        assert [b["title"] for b in storage.load()] == ["Emma"]

    def test_duplicate_check_skips_records_without_string_title(self):
        service = BookService(InMemoryBookStorage([{"id": EXISTING["id"], "title": None, "author": "X"}]))
        book = run(service.create_book({"title": "None", "author": "Herbert"}))
        assert book["title"] == "None"


class TestGetBook:
    def test_round_trip(self, service):
        created = run(service.create_book({"title": "Dune", "author": "Herbert", "year": 1965}))
        assert run(service.get_book(created["id"])) == created

    def test_invalid_id(self, service):
        with pytest.raises(InvalidIdError):
            run(service.get_book("not-a-uuid"))

    def test_invalid_id_is_checked_before_loading(self):
        with pytest.raises(InvalidIdError):
            run(BookService(FailingStorage("load")).get_book("not-a-uuid"))

    def test_not_found(self, service):
        with pytest.raises(NotFoundError):
            run(service.get_book(str(uuid.uuid4())))

    def test_match_is_exact(self):
        service = BookService(InMemoryBookStorage([EXISTING]))
        with pytest.raises(NotFoundError):
            run(service.get_book(EXISTING["id"].upper()))


class TestListBooks:
    def test_empty(self, service):
        assert run(service.list_books()) == []

    def test_returns_stored_records_unchanged(self):
        legacy = [dict(EXISTING, genre="sf"), {"id": str(uuid.uuid4()), "title": "Emma", "author": None}]
        service = BookService(InMemoryBookStorage(legacy))
        assert run(service.list_books()) == legacy

    def test_is_idempotent(self):
        service = BookService(InMemoryBookStorage([EXISTING]))
        assert run(service.list_books()) == run(service.list_books())

    def test_read_failure_propagates(self):
        with pytest.raises(StorageReadError):
            run(BookService(FailingStorage("load")).list_books())


class TestDeleteBook:
    def test_removes_and_returns_book(self, service, storage):
        created = run(service.create_book({"title": "Dune", "author": "Herbert", "year": 1965}))
        deleted = run(service.delete_book(created["id"]))
        assert deleted == created
        assert storage.load() == []
        with pytest.raises(NotFoundError):
            run(service.get_book(created["id"]))

    def test_removes_only_the_first_match(self):
        storage = InMemoryBookStorage([EXISTING, dict(EXISTING, title="Dune Messiah")])
        service = BookService(storage)
        deleted = run(service.delete_book(EXISTING["id"]))
        assert deleted["title"] == "Dune"
        assert [b["title"] for b in storage.load()] == ["Dune Messiah"]

    def test_invalid_id(self, service):
        with pytest.raises(InvalidIdError):
            run(service.delete_book("1234"))

    def test_not_found(self, service):
        with pytest.raises(NotFoundError):
            run(service.delete_book(str(uuid.uuid4())))
