"""
Tests for stats service: daily stats and known-card tracking.
"""
from datetime import date, timedelta

import pytest

from flashdeck.core.exceptions import NotFoundError, ValidationError
from flashdeck.services import deck_service, stats_service
from flashdeck.services.stats_service import SessionStats

TODAY = date(2026, 3, 10)


@pytest.fixture
def deck(session):
    deck = deck_service.create_deck(session, user_id=1, title="Spanish verbs")
    for i in range(4):
        deck_service.create_flashcard(session, deck.id, f"verbo {i}", f"verb {i}")
    return deck


@pytest.fixture
def card_ids(session, deck):
    return [card.id for card in deck_service.get_flashcards_by_deck_id(session, deck.id)]


class TestRecordSession:
    def test_first_session_creates_daily_row(self, session, deck, card_ids):
        stats = SessionStats(deck_id=deck.id, viewed=3, correct=2, hard=1,
                             session_duration_ms=60000, total_answer_delay_ms=4500,
                             known_card_ids_delta=card_ids[:2])

        assert stats_service.record_session(session, stats, today=TODAY) is True

        daily = stats_service.get_daily_stats(session, deck.id)
        assert len(daily) == 1
        assert daily[0].stat_date == TODAY
        assert daily[0].sessions == 1
        assert daily[0].viewed == 3
        assert daily[0].total_answer_delay_ms == 4500
        assert stats_service.get_known_card_ids(session, deck.id) == set(card_ids[:2])

    def test_same_day_sessions_accumulate(self, session, deck):
        for _ in range(2):
            stats_service.record_session(
                session, SessionStats(deck_id=deck.id, viewed=2, correct=1, hard=1), today=TODAY
            )
        daily = stats_service.get_daily_stats(session, deck.id)
        assert len(daily) == 1
        assert daily[0].sessions == 2
        assert daily[0].viewed == 4
        assert daily[0].hard == 2

    def test_known_delta_skips_already_known(self, session, deck, card_ids):
        stats_service.set_card_known(session, deck.id, card_ids[0], True)
        stats = SessionStats(deck_id=deck.id, viewed=2, correct=2, hard=0,
                             known_card_ids_delta=[card_ids[0], card_ids[1]])
        stats_service.record_session(session, stats, today=TODAY)
        assert stats_service.get_known_card_ids(session, deck.id) == {card_ids[0], card_ids[1]}

    def test_zero_viewed_is_skipped(self, session, deck):
        stats = SessionStats(deck_id=deck.id, viewed=0, correct=0, hard=0)
        assert stats_service.record_session(session, stats, today=TODAY) is False
        assert stats_service.get_daily_stats(session, deck.id) == []

    def test_negative_counter_rejected(self, session, deck):
        stats = SessionStats(deck_id=deck.id, viewed=2, correct=-1, hard=0)
        with pytest.raises(ValidationError):
            stats_service.record_session(session, stats, today=TODAY)

    def test_daily_stats_ordered_by_date(self, session, deck):
        yesterday = TODAY - timedelta(days=1)
        stats_service.record_session(session, SessionStats(deck_id=deck.id, viewed=1, correct=1, hard=0), today=TODAY)
        stats_service.record_session(session, SessionStats(deck_id=deck.id, viewed=1, correct=1, hard=0), today=yesterday)
        assert [row.stat_date for row in stats_service.get_daily_stats(session, deck.id)] == [yesterday, TODAY]


class TestKnownCards:
    def test_set_and_unset(self, session, deck, card_ids):
        stats_service.set_card_known(session, deck.id, card_ids[0], True)
        assert stats_service.is_card_known(session, deck.id, card_ids[0])
        stats_service.set_card_known(session, deck.id, card_ids[0], False)
        assert not stats_service.is_card_known(session, deck.id, card_ids[0])

    def test_marking_twice_keeps_one_row(self, session, deck, card_ids):
        stats_service.set_card_known(session, deck.id, card_ids[0], True)
        stats_service.set_card_known(session, deck.id, card_ids[0], True)
        assert stats_service.get_known_card_ids(session, deck.id) == {card_ids[0]}

    def test_toggle(self, session, deck, card_ids):
        assert stats_service.toggle_card_known(session, deck.id, card_ids[1]) is True
        assert stats_service.toggle_card_known(session, deck.id, card_ids[1]) is False

    def test_batch_mark(self, session, deck, card_ids):
        added = stats_service.mark_cards_known(session, deck.id, card_ids + card_ids[:1])
        assert added == 4

    def test_progress_percent(self, session, deck, card_ids):
        stats_service.mark_cards_known(session, deck.id, card_ids[:1])
        assert stats_service.get_deck_progress_percent(session, deck.id, 4) == 25
        assert stats_service.get_deck_progress_percent(session, deck.id, 0) == 0

    def test_progress_percent_rounds_half_up(self, session, deck, card_ids):
        stats_service.mark_cards_known(session, deck.id, card_ids[:1])
        assert stats_service.get_deck_progress_percent(session, deck.id, 8) == 13

    def test_reset_progress(self, session, deck, card_ids):
        stats_service.mark_cards_known(session, deck.id, card_ids[:3])
        assert stats_service.reset_deck_progress(session, deck.id) == 3
        assert stats_service.get_known_card_ids(session, deck.id) == set()

    def test_reset_unknown_deck(self, session):
        with pytest.raises(NotFoundError):
            stats_service.reset_deck_progress(session, 999)


class TestAggregates:
    def test_all_time_and_today(self, session, deck):
        other = deck_service.create_deck(session, user_id=1, title="Other")
        yesterday = TODAY - timedelta(days=1)
        stats_service.record_session(session, SessionStats(deck_id=deck.id, viewed=5, correct=4, hard=1), today=yesterday)
        stats_service.record_session(session, SessionStats(deck_id=deck.id, viewed=3, correct=1, hard=2), today=TODAY)

        aggregates = stats_service.get_deck_aggregates(session, [deck.id, other.id], today=TODAY)

        assert other.id not in aggregates
        agg = aggregates[deck.id]
        assert agg.sessions_all == 2
        assert agg.viewed_all == 8
        assert agg.hard_all == 3
        assert agg.sessions_today == 1
        assert agg.correct_today == 1

    def test_empty_ids(self, session):
        assert stats_service.get_deck_aggregates(session, []) == {}
