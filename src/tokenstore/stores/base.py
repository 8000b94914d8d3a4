"""Preference store contract and the dotted-path filter shared by all backends."""

from __future__ import annotations

import copy
from typing import Any, Optional, Protocol

from tokenstore.exceptions import MalformedPreferencesError
from tokenstore.models.preferences import PreferenceDocument


class PreferenceStore(Protocol):
    """Read side of a per-user preference store.

    ``retrieve`` returns a snapshot of the user's preferences narrowed by
    *preference_filter*, or ``None`` when the user has nothing stored.
    Absence is a normal outcome, not an error.
    """

    async def retrieve(
        self, user_id: str, preference_filter: Optional[str] = None
    ) -> PreferenceDocument | None: ...


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def _flatten(node: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    """Return ``(dotted path, leaf)`` pairs; empty mappings count as leaves."""
    flat: list[tuple[str, Any]] = []
    for key, value in node.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict) and value:
            flat.extend(_flatten(value, path))
        else:
            flat.append((path, value))
    return flat


def _unflatten(flat: list[tuple[str, Any]]) -> dict[str, Any]:
    root: dict[str, Any] = {}
    for path, value in flat:
        node = root
        *parents, leaf = path.split(".")
        for part in parents:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise MalformedPreferencesError(
                    f"Preference {path!r} is nested under a non-mapping value"
                )
            node = child
        if leaf in node:
            # An empty mapping merges into whatever already sits at its path
            if value == {} and isinstance(node[leaf], dict):
                continue
            raise MalformedPreferencesError(f"Preference {path!r} is defined more than once")
        node[leaf] = copy.deepcopy(value)
    return root


def narrow_preferences(
    document: PreferenceDocument, preference_filter: Optional[str] = None
) -> PreferenceDocument:
    """Return a copy of *document* restricted to keys under *preference_filter*.

    Preferences are addressed by dotted key paths, whether stored nested
    (``{"org": {"alfresco": ...}}``) or flat (``{"org.alfresco...": ...}``).
    Mapping documents always come back in nested form, filtered or not.
    A key matches when it equals the filter or lies beneath it; matches keep
    their full path, so ``org.alfresco.share.oauth`` yields
    ``{"org": {"alfresco": {"share": {"oauth": {...}}}}}``.

    An empty filter keeps every key. A filter that matches nothing, or a
    filter applied to a non-mapping document, yields ``{}``; a non-mapping
    document without a filter is returned whole.

    Raises:
        MalformedPreferencesError: two keys resolve to the same path, or a
            key lies beneath a path that holds a plain value.
    """
    prefix = (preference_filter or "").strip(".")
    if not isinstance(document, dict):
        return {} if prefix else copy.deepcopy(document)

    flat = _flatten(document)
    if prefix:
        flat = [
            (path, value)
            for path, value in flat
            if path == prefix or path.startswith(prefix + ".")
        ]
    return _unflatten(flat)
