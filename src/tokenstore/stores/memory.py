"""In-memory preference store — development backend and test double."""

from __future__ import annotations

import copy
from typing import Any, Mapping, Optional

from tokenstore.models.preferences import PreferenceDocument
from tokenstore.stores.base import narrow_preferences


def _deep_merge(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    for key, value in updates.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            _deep_merge(existing, value)
        else:
            target[key] = copy.deepcopy(value)


class InMemoryPreferenceStore:
    """Dict-backed preference store for local development and tests.

    Holds one document per user in process memory; nothing survives a restart.
    """

    def __init__(self, initial: Optional[Mapping[str, PreferenceDocument]] = None):
        self._store: dict[str, PreferenceDocument] = {
            user_id: copy.deepcopy(document) for user_id, document in (initial or {}).items()
        }

    async def retrieve(
        self, user_id: str, preference_filter: Optional[str] = None
    ) -> PreferenceDocument | None:
        if user_id not in self._store:
            return None
        return narrow_preferences(self._store[user_id], preference_filter)

    async def update(self, user_id: str, preferences: Mapping[str, Any]) -> None:
        existing = self._store.get(user_id)
        if not isinstance(existing, dict):
            existing = {}
        _deep_merge(existing, preferences)
        self._store[user_id] = existing

    async def clear(self, user_id: str) -> None:
        self._store.pop(user_id, None)
