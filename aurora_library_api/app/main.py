"""
Main entrypoint for the Aurora Library API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn aurora_library_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.errors import BookStoreError
from .core.logging_config import setup_logging
from .core.storage import BookStorage, FileBookStorage
from .services.book_service import BookService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, storage: Optional[BookStorage] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module level settings
        read from the environment.
    storage : Optional[BookStorage]
        Backend holding the book collection.  Defaults to a
        ``FileBookStorage`` on ``settings.data_file``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    if storage is None:
        storage = FileBookStorage(settings.get_data_file_path())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.init_data_file and isinstance(storage, FileBookStorage):
            storage.ensure_exists()
        logger.info("%s %s started (%s)", settings.project_name, settings.api_version, settings.environment)
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.book_service = BookService(storage)

    app.include_router(router)
    _register_error_handlers(app, settings)

    return app


def _register_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(BookStoreError)
    async def book_store_error_handler(request: Request, exc: BookStoreError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Answer a body that is not valid JSON with 400.

        The book payload itself is validated by the service, so only
        unparsable bodies end up here.  They get a 400 instead of
        going through the generic 500 handler.
        """
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "El cuerpo de la petición no es un JSON válido"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "error": "Ruta no encontrada",
                    "message": f"La ruta {_original_url(request)} no existe en este servidor",
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error handling %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Error interno del servidor",
                "message": str(exc) if settings.is_development else "Algo salió mal",
            },
        )


def _original_url(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
