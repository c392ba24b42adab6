"""
Exception hierarchy for the book store.

Every failure the service anticipates is a ``BookStoreError`` carrying
the HTTP status it maps to and the human readable message returned to
the client.  The handlers registered in ``main.create_app`` turn these
into ``{"error": message}`` JSON bodies; anything else is treated as an
unexpected error and answered with a generic 500.
"""

from fastapi import status


class BookStoreError(Exception):
    """Base class for all anticipated book store failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Error interno del servidor"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class StorageError(BookStoreError):
    """The backing store could not be read or written."""


class StorageReadError(StorageError):
    default_message = "Error al leer los datos de libros"


class StorageWriteError(StorageError):
    default_message = "Error al guardar los datos de libros"


class InvalidIdError(BookStoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "ID inválido"


class NotFoundError(BookStoreError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Libro no encontrado"


class ValidationError(BookStoreError):
    """A creation payload was rejected."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Datos de libro no validos"


class MissingFieldError(ValidationError):
    default_message = "Los campos titulo y autor son obligatorios"


class FieldTypeError(ValidationError):
    default_message = "Titulo y autor no validos"


class InvalidYearError(ValidationError):
    default_message = "El año debe ser un número válido"


class DuplicateError(BookStoreError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Ya existe un libro con el mismo título y año"
