"""
Settings service for per-user locale and practice defaults.
"""
import logging
from typing import Optional
from sqlmodel import Session, select

from flashdeck.core.clock import utc_now
from flashdeck.core.config import settings
from flashdeck.core.exceptions import ValidationError
from flashdeck.models.models import PracticeDirection, UserSettings

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """
    Lower-case and trim a locale code, checking it is supported.

    Raises:
        ValidationError: If the locale is not one of settings.supported_locales
    """
    code = (locale_code or "").strip().lower()
    if code not in settings.supported_locales:
        raise ValidationError(
            f"Unsupported locale '{locale_code}'. Supported: {', '.join(settings.supported_locales)}"
        )
    return code


def get_or_create_settings(session: Session, user_id: int) -> UserSettings:
    """Return the user's settings row, creating it from application defaults."""
    user_settings = session.exec(
        select(UserSettings).where(UserSettings.user_id == user_id)
    ).first()
    if user_settings:
        return user_settings

    user_settings = UserSettings(
        user_id=user_id,
        preferred_locale_code=settings.default_locale,
        default_count=max(1, settings.practice_default_count),
        default_random_order=settings.practice_default_random_order,
        default_direction=PracticeDirection(settings.practice_default_direction),
    )
    session.add(user_settings)
    session.commit()
    session.refresh(user_settings)
    logger.info(f"Created default settings for user {user_id}")
    return user_settings


def update_settings(
    session: Session,
    user_id: int,
    default_count: Optional[int] = None,
    default_random_order: Optional[bool] = None,
    default_direction: Optional[PracticeDirection] = None,
    preferred_locale_code: Optional[str] = None
) -> UserSettings:
    """
    Update the provided fields of a user's settings.

    default_count is clamped to at least 1.
    """
    user_settings = get_or_create_settings(session, user_id)

    if default_count is not None:
        user_settings.default_count = max(1, default_count)
    if default_random_order is not None:
        user_settings.default_random_order = default_random_order
    if default_direction is not None:
        user_settings.default_direction = PracticeDirection(default_direction)
    if preferred_locale_code is not None:
        user_settings.preferred_locale_code = normalize_locale(preferred_locale_code)
    user_settings.updated_at = utc_now()

    session.add(user_settings)
    session.commit()
    session.refresh(user_settings)
    logger.info(
        f"Updated settings for user {user_id}: count={user_settings.default_count}, "
        f"random={user_settings.default_random_order}, direction={user_settings.default_direction}, "
        f"locale={user_settings.preferred_locale_code}"
    )
    return user_settings
