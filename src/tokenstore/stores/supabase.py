"""Supabase-backed preference store — one jsonb document per user."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import httpx
import structlog
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import create_client

from tokenstore.config import Settings
from tokenstore.exceptions import (
    MalformedPreferencesError,
    PreferenceStoreError,
    StoreConfigError,
    StoreUnavailableError,
)
from tokenstore.models.preferences import PreferenceDocument, preference_document_adapter
from tokenstore.stores.base import narrow_preferences

logger = structlog.get_logger()


class SupabasePreferenceStore:
    """Reads ``<table>.preferences`` for ``user_id`` through the Supabase SDK.

    The SDK is synchronous, so queries run in a worker thread to keep the
    event loop free. Filtering happens here, after the row is fetched.
    """

    backend = "supabase"

    def __init__(self, client: Any, table: str = "user_preferences"):
        self._client = client
        self._table = table

    @classmethod
    def from_settings(cls, settings: Settings) -> SupabasePreferenceStore:
        """Create a store using the service_role key."""
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise StoreConfigError(
                "supabase backend requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_role_key)
        return cls(client, table=settings.supabase_preferences_table)

    def _fetch_row_sync(self, user_id: str) -> dict | None:
        """Fetch the user's preferences row (sync, runs in thread pool)."""
        response = (
            self._client.table(self._table)
            .select("preferences")
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
        # Newer SDKs return None instead of an empty response when no row matches
        if response is None:
            return None
        return response.data

    async def retrieve(
        self, user_id: str, preference_filter: Optional[str] = None
    ) -> PreferenceDocument | None:
        try:
            row = await asyncio.to_thread(self._fetch_row_sync, user_id)
        except (httpx.HTTPError, OSError) as exc:
            logger.warning(
                "preference_store.unavailable", backend=self.backend, table=self._table, exc_info=True
            )
            raise StoreUnavailableError(
                f"Preference store unreachable: {exc}", backend=self.backend
            ) from exc
        except APIError as exc:
            # Query rejected by PostgREST: permissions, missing table, several rows
            logger.error(
                "preference_store.query_failed",
                backend=self.backend,
                table=self._table,
                code=exc.code,
            )
            raise PreferenceStoreError(
                f"Preference query failed: {exc.message}", backend=self.backend
            ) from exc

        if not row:
            return None

        raw = row.get("preferences")
        if raw is None:
            return None

        try:
            if isinstance(raw, (str, bytes)):
                raw = json.loads(raw)
            document = preference_document_adapter.validate_python(raw)
        except (ValueError, ValidationError) as exc:
            logger.error("preference_store.malformed", backend=self.backend, table=self._table)
            raise MalformedPreferencesError(
                f"Stored preferences are not a JSON document: {exc}", backend=self.backend
            ) from exc

        logger.debug("preference_store.retrieve", backend=self.backend, filter=preference_filter)
        return narrow_preferences(document, preference_filter)
