"""Preference store selection from settings."""

from __future__ import annotations

import structlog

from tokenstore.config import Settings
from tokenstore.exceptions import StoreConfigError
from tokenstore.stores.base import PreferenceStore
from tokenstore.stores.memory import InMemoryPreferenceStore
from tokenstore.stores.supabase import SupabasePreferenceStore

logger = structlog.get_logger()


def build_preference_store(settings: Settings) -> PreferenceStore:
    """Return the backend named by ``settings.preference_backend``."""
    backend = settings.preference_backend.strip().lower()
    if backend == "memory":
        store: PreferenceStore = InMemoryPreferenceStore()
    elif backend == "supabase":
        store = SupabasePreferenceStore.from_settings(settings)
    else:
        raise StoreConfigError(f"Unknown preference backend: {settings.preference_backend!r}")

    logger.info("preference_store.created", backend=backend)
    return store
