"""
UserSettings model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from flashdeck.core.clock import utc_now
from flashdeck.models.enums import PracticeDirection


class UserSettings(SQLModel, table=True):
    """UserSettings table - per-user locale and practice defaults."""
    __tablename__ = "user_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(unique=True, index=True)
    preferred_locale_code: str = Field(default="en", max_length=10)
    default_count: int = Field(default=10, ge=1)
    default_random_order: bool = Field(default=True)
    default_direction: PracticeDirection = Field(default=PracticeDirection.FRONT_TO_BACK)
    updated_at: datetime = Field(default_factory=utc_now)
