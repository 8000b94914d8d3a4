"""FastAPI dependency injection — preference store, lookup service and caller identity."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Request

from tokenstore.config import settings
from tokenstore.exceptions import InvalidPreconditionError
from tokenstore.services.preference_lookup import PreferenceLookupService
from tokenstore.stores.base import PreferenceStore
from tokenstore.stores.factory import build_preference_store


@lru_cache(maxsize=1)
def get_preference_store() -> PreferenceStore:
    """Return a singleton preference store for the configured backend."""
    return build_preference_store(settings)


def get_lookup_service(
    store: PreferenceStore = Depends(get_preference_store),
) -> PreferenceLookupService:
    return PreferenceLookupService(store)


def get_current_user_id(request: Request) -> str:
    """Return the authenticated user name set by the upstream auth proxy.

    Raises InvalidPreconditionError (rendered as 401) when the header is
    missing or blank.
    """
    user_id = (request.headers.get(settings.identity_header) or "").strip()
    if not user_id:
        raise InvalidPreconditionError("No authenticated user on request")
    return user_id
