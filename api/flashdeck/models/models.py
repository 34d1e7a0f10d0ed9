"""
Models module - re-exports all models.

Allows imports like:
    from flashdeck.models.models import Deck
"""
from flashdeck.models.enums import PracticeDirection
from flashdeck.models.deck import Deck
from flashdeck.models.flashcard import Flashcard
from flashdeck.models.known_card import KnownCard
from flashdeck.models.deck_daily_stats import DeckDailyStats
from flashdeck.models.user_settings import UserSettings
from flashdeck.models.practice_session import Card, PracticeSession

__all__ = [
    'PracticeDirection',
    'Deck',
    'Flashcard',
    'KnownCard',
    'DeckDailyStats',
    'UserSettings',
    'Card',
    'PracticeSession',
]
