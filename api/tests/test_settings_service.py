"""
Tests for per-user settings.
"""
import pytest

from flashdeck.core.config import settings
from flashdeck.core.exceptions import ValidationError
from flashdeck.models.enums import PracticeDirection
from flashdeck.services import settings_service


class TestLocale:
    def test_normalizes_case_and_whitespace(self):
        assert settings_service.normalize_locale(" RU ") == "ru"

    @pytest.mark.parametrize("code", ["", "fr", None])
    def test_unsupported_locale_rejected(self, code):
        with pytest.raises(ValidationError):
            settings_service.normalize_locale(code)


class TestUserSettings:
    def test_defaults_created_from_config(self, session):
        user_settings = settings_service.get_or_create_settings(session, user_id=5)
        assert user_settings.default_count == settings.practice_default_count
        assert user_settings.default_random_order is settings.practice_default_random_order
        assert user_settings.preferred_locale_code == settings.default_locale

    def test_created_once(self, session):
        first = settings_service.get_or_create_settings(session, user_id=5)
        second = settings_service.get_or_create_settings(session, user_id=5)
        assert first.id == second.id

    def test_update_fields(self, session):
        updated = settings_service.update_settings(
            session, 5,
            default_count=25,
            default_random_order=False,
            default_direction=PracticeDirection.BACK_TO_FRONT,
            preferred_locale_code="ES",
        )
        assert updated.default_count == 25
        assert updated.default_random_order is False
        assert updated.default_direction == PracticeDirection.BACK_TO_FRONT
        assert updated.preferred_locale_code == "es"

    def test_count_clamped_to_one(self, session):
        assert settings_service.update_settings(session, 5, default_count=0).default_count == 1

    def test_partial_update_keeps_other_fields(self, session):
        settings_service.update_settings(session, 5, default_random_order=False)
        updated = settings_service.update_settings(session, 5, default_count=3)
        assert updated.default_random_order is False
        assert updated.default_count == 3

    def test_bad_locale_rejected(self, session):
        with pytest.raises(ValidationError):
            settings_service.update_settings(session, 5, preferred_locale_code="xx")
