"""htmx-todo configuration management.

Loads configuration from .htmx-todo/config.yaml with sensible defaults.
All settings can be overridden via environment variables (HTMX_TODO_*).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .htmx-todo/config.yaml (project-local)
3. ~/.htmx-todo/config.yaml (user-global)
4. Built-in defaults

The CLI loads configuration once at startup and hands it to create_app();
nothing reads it through a global.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from htmx_todo.foundation.errors import config_error

logger = logging.getLogger(__name__)

_ENV_PREFIX = "HTMX_TODO_"


@dataclass
class ServerConfig:
    """HTTP listener and page settings."""

    host: str = "127.0.0.1"
    """Host to bind to."""

    port: int = 8888
    """Port to listen on."""

    title: str = "HTMX • TodoMVC"
    """Title of the full page."""


@dataclass
class SessionConfig:
    """Anonymous session cookie settings."""

    cookie_name: str = "sessionId"
    """Cookie carrying the opaque session token."""

    expiry_cookie_name: str = "sessionExpires"
    """Cookie carrying the UTC expiry timestamp the server checks."""

    max_age: int = 600
    """Session lifetime in seconds. Expiry purges all tasks."""

    token_length: int = 128
    """Length of the alphanumeric session token."""


@dataclass
class LoggingConfig:
    """Root logger settings. The CLI --debug flag still wins over level."""

    level: str = "WARNING"
    """Level name for the root logger and uvicorn's loggers."""

    file: str | None = None
    """Also append log records to this file when set."""


@dataclass
class TodoConfig:
    """Root configuration for htmx-todo."""

    server: ServerConfig = field(default_factory=ServerConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    debug: bool = False
    """Enable debug logging by default."""


_SECTIONS: dict[str, type] = {
    "server": ServerConfig,
    "session": SessionConfig,
    "logging": LoggingConfig,
}


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(value: str) -> bool | int | float | str:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env_overrides(config_dict: dict, environ: dict[str, str] | None = None) -> dict:
    """Apply environment variable overrides.

    Environment variables follow pattern: HTMX_TODO_SECTION_KEY, with keys
    matched against the known dataclass fields so keys containing
    underscores split correctly.

    Examples:
        HTMX_TODO_SERVER_PORT=9000
        HTMX_TODO_SESSION_MAX_AGE=60
        HTMX_TODO_DEBUG=true
    """
    env = os.environ if environ is None else environ

    for key, value in env.items():
        if not key.startswith(_ENV_PREFIX):
            continue

        path_str = key[len(_ENV_PREFIX):].lower()

        if path_str == "debug":
            config_dict["debug"] = _coerce(value)
            continue

        for section, section_cls in _SECTIONS.items():
            if not path_str.startswith(section + "_"):
                continue
            remaining = path_str[len(section) + 1:]
            known = {f.name for f in fields(section_cls)}
            if remaining in known:
                config_dict.setdefault(section, {})[remaining] = _coerce(value)
            else:
                logger.debug("Ignoring unknown config override %s", key)
            break

    return config_dict


def _dict_to_config(data: dict) -> TodoConfig:
    """Convert a dict to TodoConfig."""
    try:
        config = TodoConfig(
            server=ServerConfig(**data.get("server", {})),
            session=SessionConfig(**data.get("session", {})),
            logging=LoggingConfig(**data.get("logging", {})),
            debug=bool(data.get("debug", False)),
        )
    except TypeError as e:
        raise config_error("config", str(e)) from e

    _validate(config)
    return config


def _validate(config: TodoConfig) -> None:
    positive = {
        "server.port": config.server.port,
        "session.max_age": config.session.max_age,
        "session.token_length": config.session.token_length,
    }
    for key, value in positive.items():
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise config_error(key, f"expected a positive integer, got {value!r}")

    if not isinstance(logging.getLevelName(str(config.logging.level).upper()), int):
        raise config_error("logging.level", f"unknown level {config.logging.level!r}")


def load_config(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> TodoConfig:
    """Load configuration from file with defaults and env overrides.

    Priority (highest to lowest):
    1. Environment variables (HTMX_TODO_*)
    2. Explicit path if provided
    3. .htmx-todo/config.yaml (project-local)
    4. ~/.htmx-todo/config.yaml (user-global)
    5. Built-in defaults

    Args:
        path: Optional explicit config file path.
        environ: Environment mapping to read overrides from (default: os.environ).

    Returns:
        Merged TodoConfig instance.

    Raises:
        TodoError: If a merged value is invalid.
    """
    config_dict: dict[str, Any] = asdict(TodoConfig())

    config_paths = []
    if path:
        config_paths.append(Path(path))
    config_paths.extend([
        Path(".htmx-todo/config.yaml"),
        Path.home() / ".htmx-todo" / "config.yaml",
    ])

    for config_path in config_paths:
        if config_path.exists():
            try:
                with open(config_path) as f:
                    file_config = yaml.safe_load(f) or {}
                _deep_update(config_dict, file_config)
                logger.debug("Loaded config from %s", config_path)
                break  # Use first found config
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Skipping unreadable config %s: %s", config_path, e)

    config_dict = _apply_env_overrides(config_dict, environ)
    return _dict_to_config(config_dict)
