"""
Tests for deck and flashcard management.
"""
import pytest

from flashdeck.core.exceptions import NotFoundError, ValidationError
from flashdeck.models.models import Deck, Flashcard, KnownCard, UserSettings
from flashdeck.services import deck_service, stats_service
from flashdeck.services.stats_service import SessionStats


class TestDecks:
    def test_create_trims_text(self, session):
        deck = deck_service.create_deck(session, 1, "  German  ", "  basics ")
        assert deck.id is not None
        assert deck.title == "German"
        assert deck.description == "basics"

    def test_blank_title_rejected(self, session):
        with pytest.raises(ValidationError):
            deck_service.create_deck(session, 1, "   ")

    def test_title_too_long_rejected(self, session):
        with pytest.raises(ValidationError):
            deck_service.create_deck(session, 1, "x" * 121)

    def test_list_only_own_decks(self, session):
        deck_service.create_deck(session, 1, "Mine")
        deck_service.create_deck(session, 2, "Theirs")
        assert [deck.title for deck in deck_service.list_decks(session, 1)] == ["Mine"]

    def test_update(self, session):
        deck = deck_service.create_deck(session, 1, "Old", "desc")
        deck = deck_service.update_deck(session, deck.id, title="New", description="")
        assert deck.title == "New"
        assert deck.description is None

    def test_get_missing(self, session):
        with pytest.raises(NotFoundError):
            deck_service.get_deck(session, 42)

    def test_delete_removes_cards_and_progress(self, session):
        deck = deck_service.create_deck(session, 1, "Doomed")
        card = deck_service.create_flashcard(session, deck.id, "a", "b")
        stats_service.record_session(
            session,
            SessionStats(deck_id=deck.id, viewed=1, correct=1, hard=0, known_card_ids_delta=[card.id])
        )

        deck_id = deck.id
        deck_service.delete_deck(session, deck_id)

        with pytest.raises(NotFoundError):
            deck_service.get_deck(session, deck_id)
        assert deck_service.get_flashcards_by_deck_id(session, deck_id) == []
        assert stats_service.get_known_card_ids(session, deck_id) == set()
        assert stats_service.get_daily_stats(session, deck_id) == []


class TestFlashcards:
    @pytest.fixture
    def deck(self, session):
        return deck_service.create_deck(session, 1, "Cards")

    def test_create_and_list_in_order(self, session, deck):
        deck_service.create_flashcard(session, deck.id, "eins", "one", example="eins, zwei")
        deck_service.create_flashcard(session, deck.id, "zwei", "two")
        cards = deck_service.get_flashcards_by_deck_id(session, deck.id)
        assert [card.front_text for card in cards] == ["eins", "zwei"]
        assert cards[0].example == "eins, zwei"

    def test_missing_back_text_rejected(self, session, deck):
        with pytest.raises(ValidationError):
            deck_service.create_flashcard(session, deck.id, "front", " ")

    def test_card_for_missing_deck(self, session):
        with pytest.raises(NotFoundError):
            deck_service.create_flashcard(session, 999, "a", "b")

    def test_update(self, session, deck):
        card = deck_service.create_flashcard(session, deck.id, "a", "b")
        card = deck_service.update_flashcard(session, card.id, back_text="c")
        assert card.front_text == "a"
        assert card.back_text == "c"

    def test_delete_clears_known_mark(self, session, deck):
        deck_id = deck.id
        card_id = deck_service.create_flashcard(session, deck_id, "a", "b").id
        stats_service.set_card_known(session, deck_id, card_id, True)
        deck_service.delete_flashcard(session, card_id)
        assert stats_service.get_known_card_ids(session, deck_id) == set()
        with pytest.raises(NotFoundError):
            deck_service.get_flashcard(session, card_id)


class TestTimestamps:
    @pytest.mark.parametrize("make_row", [
        lambda: Deck(user_id=1, title="t"),
        lambda: Flashcard(deck_id=1, front_text="f", back_text="b"),
        lambda: KnownCard(deck_id=1, card_id=1),
        lambda: UserSettings(user_id=1),
    ], ids=["deck", "flashcard", "known_card", "user_settings"])
    def test_default_timestamps_are_timezone_aware(self, make_row):
        row = make_row()
        stamps = [getattr(row, name) for name in ("created_at", "updated_at") if hasattr(row, name)]
        assert stamps
        assert all(stamp.tzinfo is not None for stamp in stamps)

    def test_updates_write_timestamps(self, session):
        deck = deck_service.create_deck(session, 1, "Stamped")
        card = deck_service.create_flashcard(session, deck.id, "a", "b")
        assert deck_service.update_flashcard(session, card.id, front_text="c").updated_at is not None
        assert deck_service.update_deck(session, deck.id, title="Restamped").title == "Restamped"
