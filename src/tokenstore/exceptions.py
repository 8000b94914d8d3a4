"""Exception hierarchy for tokenstore."""

from __future__ import annotations


class TokenStoreError(Exception):
    """Base exception for all tokenstore errors."""


class InvalidPreconditionError(TokenStoreError, ValueError):
    """A lookup was attempted without an authenticated user id."""


class StoreConfigError(TokenStoreError):
    """Invalid or missing preference store configuration."""


class PreferenceStoreError(TokenStoreError):
    """The preference store failed to produce a snapshot."""

    def __init__(self, message: str, *, backend: str = "") -> None:
        self.backend = backend
        super().__init__(message)


class StoreUnavailableError(PreferenceStoreError):
    """The preference store could not be reached (network, timeout)."""


class MalformedPreferencesError(PreferenceStoreError):
    """Stored preference data is not a JSON document."""
