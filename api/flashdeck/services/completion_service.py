"""
Completion of practice sessions: summary metrics and persistence of results.
"""
import logging
from typing import List
from pydantic import BaseModel

from flashdeck.core.clock import SessionClock, elapsed_ms, system_clock
from flashdeck.models.practice_session import PracticeSession
from flashdeck.services.repositories import FlashcardRepository
from flashdeck.services.stats_service import SessionStats
from flashdeck.utils.number_utils import round_half_up

logger = logging.getLogger(__name__)

MAX_INT = 2**31 - 1
MAX_LONG = 2**63 - 1


class CompletionMetrics(BaseModel):
    """Summary shown when a session ends."""
    total_cards: int
    session_minutes: int
    avg_seconds: int


class CompletionRecorder:
    """Computes completion metrics and writes session results through a repository."""

    def __init__(self, clock: SessionClock = system_clock):
        self.clock = clock

    def calculate_completion_metrics(self, session: PracticeSession) -> CompletionMetrics:
        """
        Metrics for a finished session.

        Both session_minutes and avg_seconds are at least 1, so a very quick
        session never reports zero.
        """
        total_cards = len(session.cards) if session.cards else session.total_viewed

        duration_ms = elapsed_ms(session.session_start, self.clock.now())
        session_minutes = min(MAX_INT, max(1, round_half_up(duration_ms / 60000)))

        denominator = max(1.0, float(session.total_viewed))
        avg_seconds = round_half_up((session.total_answer_delay_ms / denominator) / 1000)
        avg_seconds = min(MAX_LONG, max(1, avg_seconds))

        return CompletionMetrics(
            total_cards=total_cards,
            session_minutes=session_minutes,
            avg_seconds=avg_seconds,
        )

    def known_card_ids(self, session: PracticeSession) -> List[int]:
        """
        Ids of labeled cards that were never marked hard in this session.

        Only cards before the cursor have been labeled; a single hard label
        keeps a card out of the known set.
        """
        labeled = session.cards[:session.cursor]
        return [card.id for card in labeled if card.id not in session.failed_card_ids]

    def record_and_persist(self, session: PracticeSession, repository: FlashcardRepository) -> List[int]:
        """
        Mark the session's known cards and append its stats in one repository call.

        Repository errors propagate to the caller unchanged.

        Returns:
            Ids of the cards marked known
        """
        known_ids = self.known_card_ids(session)

        if session.total_viewed <= 0:
            logger.warning(f"Nothing to record for deck {session.deck_id}: no cards were viewed")
            return []

        stats = SessionStats(
            deck_id=session.deck_id,
            viewed=session.total_viewed,
            correct=session.correct_count,
            hard=session.hard_count,
            session_duration_ms=elapsed_ms(session.session_start, self.clock.now()),
            total_answer_delay_ms=session.total_answer_delay_ms,
            known_card_ids_delta=known_ids,
        )
        repository.append_session(stats)

        logger.info(
            f"Recorded practice session for deck {session.deck_id}: "
            f"{len(known_ids)} known, {len(session.failed_card_ids)} failed"
        )
        return known_ids
