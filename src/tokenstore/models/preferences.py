"""Pydantic types for preference documents."""

from __future__ import annotations

from pydantic import JsonValue, TypeAdapter

# Tagged union over str | int | float | bool | None | list | dict[str, ...]
PreferenceDocument = JsonValue

preference_document_adapter: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)

EMPTY_DOCUMENT_JSON = "{}"
