"""Logging setup for htmx-todo.

The root logger gets one stderr handler, plus an optional file handler from
``logging.file``. The server is started with ``log_config=None`` so uvicorn
leaves logging alone and its ``uvicorn.error`` and ``uvicorn.access`` records
propagate into the same handlers, in the same format, as application records.

Level: ``--debug`` forces DEBUG; otherwise ``logging.level`` from config,
which HTMX_TODO_LOGGING_LEVEL overrides like any other config key.

Usage:
    from htmx_todo.foundation.logging import configure_logging
    level = configure_logging(config.logging, debug=config.debug)
"""

import logging
import sys
from pathlib import Path
from typing import TextIO

from htmx_todo.foundation.config import LoggingConfig

# Thread name shows which worker served a request
_DEBUG_FORMAT = "%(asctime)s [%(threadName)s] %(levelname)s %(name)s: %(message)s"
_DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def level_for(config: LoggingConfig, debug: bool = False) -> int:
    """Numeric level for a logging section."""
    if debug:
        return logging.DEBUG
    return logging.getLevelName(config.level.upper())


def configure_logging(
    config: LoggingConfig | None = None,
    *,
    debug: bool = False,
    stream: TextIO | None = None,
) -> int:
    """Install htmx-todo's handlers on the root logger.

    Safe to call again (the CLI group configures defaults, then ``serve``
    reconfigures from the loaded file); handlers from an earlier call are
    replaced and any file they held is closed.

    Returns:
        The resolved level, for handing to uvicorn.
    """
    config = config or LoggingConfig()
    level = level_for(config, debug)
    formatter = logging.Formatter(_DEBUG_FORMAT if level <= logging.DEBUG else _DEFAULT_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if config.file:
        path = Path(config.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    # uvicorn installs its own handlers when log_config is left at default;
    # these make sure records reach the root instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s file=%s", logging.getLevelName(level), config.file
    )
    return level
