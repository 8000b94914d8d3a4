"""User-scoped preference lookup — renders a user's stored preferences as JSON."""

from __future__ import annotations

import contextlib
import json
from typing import Any, Optional

import structlog

from tokenstore.exceptions import InvalidPreconditionError, MalformedPreferencesError
from tokenstore.models.preferences import EMPTY_DOCUMENT_JSON
from tokenstore.stores.base import PreferenceStore


class PreferenceLookupService:
    """Fetch one user's preference snapshot and serialize it.

    The service is stateless: it owns no data, performs no filtering of its
    own and never retries. Store errors reach the caller untouched.
    """

    def __init__(self, store: PreferenceStore, log: Any = None):
        self._store = store
        self._log = log if log is not None else structlog.get_logger()

    async def get_preferences_json(
        self, user_id: str, preference_filter: Optional[str] = None
    ) -> str:
        """Return the user's preferences under *preference_filter* as a JSON string.

        ``"{}"`` is returned when the store has nothing for the user. An empty
        mapping from the store is serialized like any other document.

        Raises:
            InvalidPreconditionError: *user_id* is empty; the store is not called.
        """
        if not user_id:
            raise InvalidPreconditionError("user_id is required for a preference lookup")

        document = await self._store.retrieve(user_id, preference_filter)

        if document is None:
            json_str = EMPTY_DOCUMENT_JSON
        else:
            try:
                json_str = json.dumps(
                    document, ensure_ascii=False, allow_nan=False, separators=(",", ":")
                )
            except (TypeError, ValueError) as exc:
                raise MalformedPreferencesError(
                    f"Preferences for user cannot be encoded as JSON: {exc}"
                ) from exc

        # Diagnostics must never cost the caller its response
        with contextlib.suppress(Exception):
            self._log.info("user_token.get", json_str=json_str, filter=preference_filter)

        return json_str
