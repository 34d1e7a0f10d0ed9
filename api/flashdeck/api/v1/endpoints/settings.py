"""
User settings endpoint.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from flashdeck.core.database import get_session
from flashdeck.schemas.settings import UserSettingsResponse, UpdateUserSettingsRequest
from flashdeck.services import settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/{user_id}", response_model=UserSettingsResponse)
async def get_settings(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Get a user's practice defaults and locale, creating them on first access."""
    return UserSettingsResponse.model_validate(settings_service.get_or_create_settings(session, user_id))


@router.put("/{user_id}", response_model=UserSettingsResponse)
async def update_settings(
    user_id: int,
    request: UpdateUserSettingsRequest,
    session: Session = Depends(get_session)
):
    user_settings = settings_service.update_settings(
        session,
        user_id,
        default_count=request.default_count,
        default_random_order=request.default_random_order,
        default_direction=request.default_direction,
        preferred_locale_code=request.preferred_locale_code
    )
    return UserSettingsResponse.model_validate(user_settings)
