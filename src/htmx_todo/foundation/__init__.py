"""Foundation domain - base config, errors, logging, and locking.

This domain has no dependencies on other htmx_todo modules.
Everything else imports from here.
"""

from htmx_todo.foundation.config import (
    LoggingConfig,
    ServerConfig,
    SessionConfig,
    TodoConfig,
    load_config,
)
from htmx_todo.foundation.errors import (
    ERROR_MESSAGES,
    ErrorCode,
    TodoError,
    config_error,
    invalid_identifier,
    missing_parameter,
    task_not_found,
)
from htmx_todo.foundation.logging import configure_logging
from htmx_todo.foundation.threading import ReadWriteLock

__all__ = [
    # === Config ===
    "LoggingConfig",
    "ServerConfig",
    "SessionConfig",
    "TodoConfig",
    "load_config",
    # === Errors ===
    "ERROR_MESSAGES",
    "ErrorCode",
    "TodoError",
    "config_error",
    "invalid_identifier",
    "missing_parameter",
    "task_not_found",
    # === Logging ===
    "configure_logging",
    # === Threading ===
    "ReadWriteLock",
]
