"""
Tests for the database-backed practice repositories.
"""
import pytest
from sqlalchemy.exc import OperationalError

from flashdeck.core.exceptions import RepositoryFailure
from flashdeck.models.enums import PracticeDirection
from flashdeck.services import deck_service, stats_service
from flashdeck.services.repositories import SqlFlashcardRepository, SqlPreferencesStore
from flashdeck.services.stats_service import SessionStats


@pytest.fixture
def deck_id(session):
    deck = deck_service.create_deck(session, 1, "Repo deck")
    for word in ("uno", "dos", "tres"):
        deck_service.create_flashcard(session, deck.id, word, word.upper())
    return deck.id


@pytest.fixture
def repository(session):
    return SqlFlashcardRepository(session)


class TestSqlFlashcardRepository:
    def test_not_known_cards_in_deck_order(self, repository, deck_id):
        cards = repository.get_flashcards_by_deck_id(deck_id)
        repository.mark_known(deck_id, cards[1].id)
        not_known = repository.get_not_known_cards(deck_id)
        assert [card.front_text for card in not_known] == ["uno", "tres"]

    def test_mark_known_batch(self, repository, deck_id):
        ids = [card.id for card in repository.get_flashcards_by_deck_id(deck_id)]
        repository.mark_known_batch(deck_id, ids)
        assert repository.get_not_known_cards(deck_id) == []

    def test_append_session(self, repository, session, deck_id):
        card_id = repository.get_flashcards_by_deck_id(deck_id)[0].id
        repository.append_session(
            SessionStats(deck_id=deck_id, viewed=1, correct=1, hard=0, known_card_ids_delta=[card_id])
        )
        assert repository.get_known_card_ids(deck_id) == {card_id}
        assert stats_service.get_daily_stats(session, deck_id)[0].sessions == 1

    def test_database_error_becomes_repository_failure(self, repository, deck_id, monkeypatch):
        def broken(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(stats_service, "record_session", broken)
        with pytest.raises(RepositoryFailure):
            repository.append_session(SessionStats(deck_id=deck_id, viewed=1, correct=1, hard=0))

    def test_read_error_becomes_repository_failure(self, repository, deck_id, monkeypatch):
        def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(deck_service, "get_flashcards_by_deck_id", broken)
        with pytest.raises(RepositoryFailure):
            repository.get_not_known_cards(deck_id)


class TestSqlPreferencesStore:
    def test_round_trip(self, session):
        store = SqlPreferencesStore(session, user_id=9)
        store.set_default_count(7)
        store.set_default_random_order(False)
        store.set_default_direction(PracticeDirection.BACK_TO_FRONT)
        assert store.get_default_count() == 7
        assert store.is_default_random_order() is False
        assert store.get_default_direction() == PracticeDirection.BACK_TO_FRONT

    def test_count_never_below_one(self, session):
        store = SqlPreferencesStore(session, user_id=9)
        store.set_default_count(-4)
        assert store.get_default_count() == 1
