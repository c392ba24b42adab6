"""Logging setup for the library service."""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> bool:
    """Attach console (and optional file) handlers to the root logger.

    Does nothing if the root logger already has handlers, which is the
    case under pytest or uvicorn's own logging.  Returns ``True`` when
    handlers were installed.  ``logfile`` is created together with its
    directory when missing.
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        path = Path(logfile).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return True
