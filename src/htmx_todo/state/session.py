"""Anonymous session gate.

Sessions exist only as client cookies: an opaque token plus the UTC instant
the session lapses. The server keeps no session table. On each page load it
compares the presented expiry with its own clock, and when the session is
absent or expired it purges every task and rewinds the id counter before
issuing a fresh session. That purge is the only way stored data is dropped.
"""

import secrets
import string
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

from htmx_todo.foundation.config import SessionConfig
from htmx_todo.state.ids import IdAllocator
from htmx_todo.state.tasks import TaskStore

EXPIRY_FORMAT = "%Y-%m-%dT%H:%M:%S"
"""Wire format of the expiry cookie (19 characters, UTC)."""

_TOKEN_ALPHABET = string.ascii_letters + string.digits


class SessionStatus(Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class Session:
    token: str
    expires_at: datetime

    @property
    def expiry_value(self) -> str:
        """Expiry rendered for the cookie."""
        return self.expires_at.strftime(EXPIRY_FORMAT)


def utc_now() -> datetime:
    return datetime.now(UTC)


def parse_expiry(value: str | None) -> datetime | None:
    """Parse an expiry cookie value as UTC.

    Only the first 19 characters are read, so trailing fractional seconds or
    offsets are ignored. Either 'T' or a space may separate date and time,
    and surrounding quotes are stripped. Returns None for anything that does
    not parse.
    """
    if not value:
        return None
    stamp = value.strip().strip('"')[:19]
    if len(stamp) != 19:
        return None
    if stamp[10] == " ":
        stamp = f"{stamp[:10]}T{stamp[11:]}"
    try:
        parsed = datetime.strptime(stamp, EXPIRY_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=UTC)


def generate_token(length: int) -> str:
    """Random alphanumeric session token."""
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(length))


class SessionGate:
    """Decides whether a page load continues a session or starts over.

    Example:
        >>> gate = SessionGate(store, ids, SessionConfig())
        >>> session = gate.admit(request.cookies)
        >>> if session is not None:
        ...     pass  # state was reset; set the new cookies
    """

    def __init__(
        self,
        store: TaskStore,
        ids: IdAllocator,
        config: SessionConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._ids = ids
        self.config = config or SessionConfig()
        self._clock = clock

    def status(self, cookies: Mapping[str, str]) -> SessionStatus:
        """Classify presented cookies. Never raises on malformed input."""
        if not cookies.get(self.config.cookie_name):
            return SessionStatus.EXPIRED
        expires_at = parse_expiry(cookies.get(self.config.expiry_cookie_name))
        if expires_at is None or self._clock() > expires_at:
            return SessionStatus.EXPIRED
        return SessionStatus.ACTIVE

    def reset(self) -> Session:
        """Purge all tasks, rewind ids, and issue a new session.

        Clearing and rewinding happen under the store lock so no add can
        allocate an id between the two steps.
        """
        with self._store.locked():
            self._store.clear()
            self._ids.reset()
        return Session(
            token=generate_token(self.config.token_length),
            expires_at=self._clock() + timedelta(seconds=self.config.max_age),
        )

    def admit(self, cookies: Mapping[str, str]) -> Session | None:
        """Reset state if the session is absent or expired.

        Returns:
            The new session when a reset happened, otherwise None.
        """
        if self.status(cookies) is SessionStatus.ACTIVE:
            return None
        return self.reset()
