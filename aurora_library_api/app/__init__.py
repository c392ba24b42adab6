"""
Application package initializer.

The API is split into ``core`` (configuration, logging, errors and
storage backends), ``schemas`` (pydantic models), ``services``
(business rules) and ``api`` (FastAPI routers).  ``main`` wires them
together.
"""

from .main import app  # noqa: F401
