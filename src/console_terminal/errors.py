"""User-facing error taxonomy for the command engine."""

from __future__ import annotations


class ConsoleError(Exception):
    """Base for errors recovered at the dispatcher boundary.

    ``hint`` is an optional markup line shown after the error message.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ValidationError(ConsoleError):
    """Raised when a user name does not match the allowed pattern."""


class DuplicateUserError(ConsoleError):
    """Raised when registering a name that already exists."""


class UnknownUserError(ConsoleError):
    """Raised when logging in as a name that was never registered."""


class NoActiveSessionError(ConsoleError):
    """Raised by logout when nobody is logged in."""


class NotAuthenticatedError(ConsoleError):
    """Raised when an action requires a logged-in user."""


class NotStartedError(ConsoleError):
    """Raised when a world action is issued before ``start``."""


class InvalidDirectionError(ConsoleError):
    """Raised for a missing or unrecognized movement direction."""


class BlockedPathError(ConsoleError):
    """Raised when the location graph has no edge in the requested direction."""


class UnknownCommandError(ConsoleError):
    """Raised for a verb with no registered handler."""


class InternalConsistencyError(RuntimeError):
    """Raised when session or world invariants are broken by a programming error."""
