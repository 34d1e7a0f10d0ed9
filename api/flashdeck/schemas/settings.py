"""
User settings schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
from flashdeck.models.enums import PracticeDirection


class UserSettingsResponse(BaseModel):
    """User settings response schema."""
    user_id: int
    preferred_locale_code: str
    default_count: int
    default_random_order: bool
    default_direction: PracticeDirection

    class Config:
        from_attributes = True


class UpdateUserSettingsRequest(BaseModel):
    """Request schema for updating user settings. Omitted fields are left unchanged."""
    default_count: Optional[int] = Field(default=None, ge=1)
    default_random_order: Optional[bool] = None
    default_direction: Optional[PracticeDirection] = None
    preferred_locale_code: Optional[str] = None
