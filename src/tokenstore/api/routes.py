"""FastAPI route handlers for the token store API."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from tokenstore.api.dependencies import get_current_user_id, get_lookup_service
from tokenstore.api.schemas import ErrorResponse
from tokenstore.services.preference_lookup import PreferenceLookupService

router = APIRouter(prefix="/api/v1/tokenstore")


@router.get(
    "/user-token",
    response_class=Response,
    responses={
        200: {"content": {"application/json": {}}, "description": "Stored preference document"},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def get_user_token(
    preference_filter: Optional[str] = Query(
        default=None, alias="filter", description="Dotted preference path, e.g. org.alfresco.share.oauth"
    ),
    user_id: str = Depends(get_current_user_id),
    service: PreferenceLookupService = Depends(get_lookup_service),
):
    """Return the caller's stored OAuth token preferences.

    The serialized document is emitted verbatim as the body, so clients
    receive the stored document itself (``{}`` when nothing is stored).
    """
    json_str = await service.get_preferences_json(user_id, preference_filter)
    return Response(content=json_str, media_type="application/json")
