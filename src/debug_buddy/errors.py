"""Exceptions raised by the account layer and the settings loader.

URL parse and fetch failures are not exceptions: the resolver returns
``None`` and the analyzer reports a failed outcome.
"""


class DebugBuddyError(Exception):
    """Base class; the message is meant to be shown to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DebugBuddyError):
    """Malformed registration input."""


class ConflictError(DebugBuddyError):
    """Username or email already registered."""


class NotFoundError(DebugBuddyError):
    """No account with that username."""


class AuthError(DebugBuddyError):
    """Wrong password."""


class NotAuthenticatedError(DebugBuddyError):
    """Operation needs a logged-in session."""


class ConfigurationError(DebugBuddyError):
    """An environment setting has an unusable value."""
