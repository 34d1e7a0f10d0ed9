"""
Practice engine: state transitions of a practice session.

A session moves through question -> reveal -> label (know/hard) for each
card until the cursor passes the last card. Every operation takes a
PracticeSession and returns a new one; the input is never modified.

Calling an operation in the wrong state raises PreconditionViolation
instead of coercing the session, so a caller bug can never double count.
"""
import logging
from pydantic import BaseModel

from flashdeck.core.clock import SessionClock, elapsed_ms, system_clock
from flashdeck.core.exceptions import PreconditionViolation
from flashdeck.models.practice_session import Card, PracticeSession
from flashdeck.utils.number_utils import round_half_up

logger = logging.getLogger(__name__)


class Progress(BaseModel):
    """Position and label counts of a session, for display."""
    current: int
    total: int
    total_viewed: int
    correct: int
    hard: int
    percent: int


class SessionEngine:
    """Drives PracticeSession transitions using the given clock."""

    def __init__(self, clock: SessionClock = system_clock):
        self.clock = clock

    def is_complete(self, session: PracticeSession) -> bool:
        return session.cursor >= len(session.cards)

    def current_card(self, session: PracticeSession) -> Card:
        """
        Card under the cursor.

        Raises:
            PreconditionViolation: If the session is complete
        """
        self._require_not_complete(session, "current_card")
        return session.cards[session.cursor]

    def start_question(self, session: PracticeSession) -> PracticeSession:
        """
        Show the current card's question and stamp its show time.

        Calling again before reveal re-stamps the show time.
        """
        self._require_not_complete(session, "start_question")
        return session.model_copy(update={
            "showing_answer": False,
            "card_show_time": self.clock.now(),
        })

    def reveal(self, session: PracticeSession) -> PracticeSession:
        """
        Show the answer and add the time since the question was shown to the
        session's total answer delay.

        Revealing an already revealed card returns the session unchanged. A
        card shown again after its reveal adds no further delay, so the delay
        is counted once per card.
        """
        self._require_not_complete(session, "reveal")
        if session.showing_answer:
            logger.debug(f"Reveal ignored for deck {session.deck_id}: answer already shown")
            return session

        delay_ms = 0
        if session.card_show_time is not None and not session.answer_delay_counted:
            delay_ms = elapsed_ms(session.card_show_time, self.clock.now())

        return session.model_copy(update={
            "showing_answer": True,
            "answer_delay_counted": True,
            "total_answer_delay_ms": session.total_answer_delay_ms + delay_ms,
        })

    def mark_know(self, session: PracticeSession) -> PracticeSession:
        """Label the revealed card as known and advance."""
        self._require_answer_shown(session, "mark_know")
        return self._advance(session, {
            "correct_count": session.correct_count + 1,
        })

    def mark_hard(self, session: PracticeSession) -> PracticeSession:
        """Label the revealed card as hard, remember it as failed and advance."""
        self._require_answer_shown(session, "mark_hard")
        card = session.cards[session.cursor]
        return self._advance(session, {
            "hard_count": session.hard_count + 1,
            "failed_card_ids": session.failed_card_ids | {card.id},
        })

    def progress(self, session: PracticeSession) -> Progress:
        """
        Progress of the session.

        ``current`` is the 1-based position of the card on screen and
        ``percent`` the share of cards already labeled.
        """
        total = len(session.cards)
        if total == 0:
            return Progress(
                current=0,
                total=0,
                total_viewed=session.total_viewed,
                correct=session.correct_count,
                hard=session.hard_count,
                percent=0,
            )

        current = max(1, min(total, session.cursor + 1))
        percent = round_half_up(session.total_viewed / total * 100)
        return Progress(
            current=current,
            total=total,
            total_viewed=session.total_viewed,
            correct=session.correct_count,
            hard=session.hard_count,
            percent=max(0, min(100, percent)),
        )

    def _advance(self, session: PracticeSession, changes: dict) -> PracticeSession:
        update = {
            "cursor": session.cursor + 1,
            "showing_answer": False,
            "card_show_time": None,
            "answer_delay_counted": False,
            "total_viewed": session.total_viewed + 1,
        }
        update.update(changes)
        return session.model_copy(update=update)

    def _require_not_complete(self, session: PracticeSession, operation: str) -> None:
        if self.is_complete(session):
            raise PreconditionViolation(
                f"{operation} called on a completed session "
                f"(cursor={session.cursor}, cards={len(session.cards)})"
            )

    def _require_answer_shown(self, session: PracticeSession, operation: str) -> None:
        self._require_not_complete(session, operation)
        if not session.showing_answer:
            raise PreconditionViolation(f"{operation} called before the answer was revealed")
