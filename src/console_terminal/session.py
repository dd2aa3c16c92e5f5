"""User registry and single-session tracking."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from console_terminal.errors import (
    DuplicateUserError,
    InternalConsistencyError,
    NoActiveSessionError,
    UnknownUserError,
    ValidationError,
)

ADMIN_USER = "admin"

_NAME_RE = re.compile(r"^[a-z0-9_]{3,15}$")


@dataclass(slots=True)
class User:
    name: str
    registered_at: datetime
    is_online: bool = False
    is_admin: bool = False


@dataclass(slots=True)
class SessionState:
    active_user: str | None = None
    online: set[str] = field(default_factory=set)


def normalize_name(name: str) -> str:
    return name.strip().lower()


class SessionManager:
    """Tracks registered users, the online set and the one active user.

    Logging in while someone else is active logs that user out first. The
    seeded ``admin`` user starts online without being the active user.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logger or logging.getLogger("console_terminal.session")
        self._users: dict[str, User] = {}
        self._state = SessionState()
        self._seed_admin()

    @property
    def state(self) -> SessionState:
        return self._state

    def register(self, name: str) -> User:
        username = normalize_name(name)
        if not _NAME_RE.match(username):
            raise ValidationError(
                "Error: user name must contain only latin letters, digits and underscores, "
                "3 to 15 characters long."
            )
        if username in self._users:
            raise DuplicateUserError(f"Error: user '{username}' already exists.")

        user = User(name=username, registered_at=self._clock())
        self._users[username] = user
        self._logger.info("user_registered", extra={"user": username})
        return user

    def login(self, name: str) -> User:
        username = normalize_name(name)
        user = self._users.get(username)
        if user is None:
            raise UnknownUserError(
                f"Error: user '{username}' not found.",
                hint=f'Register with: <span class="command">register {username}</span>',
            )

        current = self._state.active_user
        if current is not None and current != username:
            self._set_offline(current)
            self._logger.info("session_evicted", extra={"user": current, "replaced_by": username})

        user.is_online = True
        self._state.online.add(username)
        self._state.active_user = username
        self._logger.info("user_logged_in", extra={"user": username})
        return user

    def logout(self) -> User:
        user = self.whoami()
        if user is None:
            raise NoActiveSessionError("Error: you are not logged in.")

        self._set_offline(user.name)
        self._state.active_user = None
        self._logger.info("user_logged_out", extra={"user": user.name})
        return user

    def whoami(self) -> User | None:
        """Return the active user, verifying the session invariants."""
        name = self._state.active_user
        if name is None:
            return None

        user = self._users.get(name)
        if user is None:
            raise InternalConsistencyError(f"Active user {name!r} is not registered")
        if not user.is_online or name not in self._state.online:
            raise InternalConsistencyError(f"Active user {name!r} is not marked online")
        return user

    def get(self, name: str) -> User | None:
        return self._users.get(normalize_name(name))

    def list_users(self) -> list[User]:
        return list(self._users.values())

    def online_users(self) -> list[str]:
        return sorted(self._state.online)

    def _set_offline(self, username: str) -> None:
        user = self._users.get(username)
        if user is None:
            raise InternalConsistencyError(f"Cannot log out unknown user {username!r}")
        user.is_online = False
        self._state.online.discard(username)

    def _seed_admin(self) -> None:
        self._users[ADMIN_USER] = User(
            name=ADMIN_USER,
            registered_at=self._clock(),
            is_online=True,
            is_admin=True,
        )
        self._state.online.add(ADMIN_USER)
