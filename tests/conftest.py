from __future__ import annotations

import os

import pytest

# Must be set before tokenstore.config instantiates Settings
os.environ.setdefault("PREFERENCE_BACKEND", "memory")
os.environ.setdefault("IDENTITY_HEADER", "x-user-name")

from tokenstore.stores.memory import InMemoryPreferenceStore  # noqa: E402

OAUTH_PREFERENCES = {
    "org": {
        "alfresco": {
            "share": {
                "oauth": {
                    "twitter": {
                        "data": "oauth_token=xxx&oauth_token_secret=yyy&oauth_callback_confirmed=true"
                    },
                    "linkedin": {"data": "oauth_token=lll"},
                },
                "dashlets": {"rss": {"url": "https://example.org/feed"}},
            }
        }
    }
}


@pytest.fixture
def store() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore(
        {
            "alice": {"twitter": {"token": "abc"}, "github": {"token": "ghp"}},
            "carol": OAUTH_PREFERENCES,
            "dave": {},
        }
    )
