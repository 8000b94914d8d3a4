from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tokenstore.config import Settings
from tokenstore.exceptions import StoreConfigError
from tokenstore.stores.factory import build_preference_store
from tokenstore.stores.memory import InMemoryPreferenceStore
from tokenstore.stores.supabase import SupabasePreferenceStore


def test_memory_backend_by_default() -> None:
    assert isinstance(build_preference_store(Settings(preference_backend="memory")), InMemoryPreferenceStore)


def test_backend_name_is_case_insensitive() -> None:
    assert isinstance(build_preference_store(Settings(preference_backend=" Memory ")), InMemoryPreferenceStore)


def test_supabase_backend(monkeypatch) -> None:
    monkeypatch.setattr("tokenstore.stores.supabase.create_client", lambda url, key: MagicMock())
    store = build_preference_store(
        Settings(
            preference_backend="supabase",
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="service-key",
        )
    )
    assert isinstance(store, SupabasePreferenceStore)


def test_supabase_backend_without_credentials() -> None:
    with pytest.raises(StoreConfigError):
        build_preference_store(
            Settings(preference_backend="supabase", supabase_url="", supabase_service_role_key="")
        )


def test_unknown_backend() -> None:
    with pytest.raises(StoreConfigError, match="redis"):
        build_preference_store(Settings(preference_backend="redis"))
