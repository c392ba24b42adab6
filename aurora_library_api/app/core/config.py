"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all: it listens on port 3000,
keeps its books in ``data/libros.json`` and hides internal error
details from clients.  Set ``ENVIRONMENT=development`` to expose the
underlying message of unexpected errors in 500 responses.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Aurora Library API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    environment: str = os.getenv("ENVIRONMENT", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Path of the JSON document holding the whole book collection.  A
    # relative path is resolved against the project root by
    # ``get_data_file_path``.
    data_file: str = os.getenv("DATA_FILE", "data/libros.json")

    # When enabled, an empty collection is written on startup if the
    # data file does not exist yet.
    init_data_file: bool = os.getenv("INIT_DATA_FILE", "true").lower() in {"1", "true", "yes"}

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    def get_data_file_path(self) -> str:
        """Compute the absolute path to the data file.

        If ``data_file`` is an absolute path, use it directly.
        Otherwise resolve it relative to the project root.
        """
        if os.path.isabs(self.data_file):
            return self.data_file
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
        return str((base_dir / self.data_file).resolve())


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
