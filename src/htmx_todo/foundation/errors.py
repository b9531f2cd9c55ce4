"""htmx-todo Error System.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- HTTP status mapping for the request router
- Context for debugging
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        1xxx - Request validation errors
        2xxx - Store errors
        5xxx - Configuration errors
    """

    # 1xxx - Request Validation Errors
    MISSING_PARAMETER = 1001
    INVALID_IDENTIFIER = 1002

    # 2xxx - Store Errors
    TASK_NOT_FOUND = 2001

    # 5xxx - Configuration Errors
    CONFIG_INVALID = 5001

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            1: "validation",
            2: "store",
            5: "config",
        }.get(prefix, "unknown")

    @property
    def http_status(self) -> int:
        """HTTP status the router answers with for this error.

        Unknown task ids collapse into 400 together with malformed ids;
        the client cannot tell them apart.
        """
        if self.category in ("validation", "store"):
            return 400
        return 500


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MISSING_PARAMETER: "Missing required query parameter '{parameter}'.",
    ErrorCode.INVALID_IDENTIFIER: "Invalid value for '{parameter}': {value!r}",
    ErrorCode.TASK_NOT_FOUND: "No task with id {task_id}.",
    ErrorCode.CONFIG_INVALID: "Invalid configuration for '{key}': {detail}",
}


class TodoError(Exception):
    """Base error type for all htmx-todo errors.

    Example:
        >>> err = TodoError(
        ...     code=ErrorCode.TASK_NOT_FOUND,
        ...     context={"task_id": 7},
        ... )
        >>> print(err)
        [TD-2001] No task with id 7.
        >>> err.http_status
        400
    """

    def __init__(self, code: ErrorCode, context: dict[str, Any] | None = None):
        self.code = code
        self.context = context or {}
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES[self.code]
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def http_status(self) -> int:
        return self.code.http_status

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'TD-1001')."""
        return f"TD-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"TodoError(code={self.code!r}, context={self.context!r})"


# Convenience factory functions

def missing_parameter(parameter: str) -> TodoError:
    """Create a MISSING_PARAMETER error."""
    return TodoError(ErrorCode.MISSING_PARAMETER, {"parameter": parameter})


def invalid_identifier(parameter: str, value: str) -> TodoError:
    """Create an INVALID_IDENTIFIER error."""
    return TodoError(
        ErrorCode.INVALID_IDENTIFIER,
        {"parameter": parameter, "value": value},
    )


def task_not_found(task_id: int) -> TodoError:
    """Create a TASK_NOT_FOUND error."""
    return TodoError(ErrorCode.TASK_NOT_FOUND, {"task_id": task_id})


def config_error(key: str, detail: str = "") -> TodoError:
    """Create a CONFIG_INVALID error."""
    return TodoError(ErrorCode.CONFIG_INVALID, {"key": key, "detail": detail})
