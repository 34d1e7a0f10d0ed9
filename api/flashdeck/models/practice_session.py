"""
PracticeSession model.

In-memory record of one practice run over a deck. Never persisted; every
transition in the practice engine returns a new copy via ``model_copy``.
"""
from pydantic import BaseModel
from typing import Optional, Tuple, FrozenSet, Sequence
from datetime import datetime

from flashdeck.core.exceptions import EmptySessionError, ValidationError


class Card(BaseModel):
    """Snapshot of a flashcard taken when the session is built."""
    id: int
    front_text: str
    back_text: str
    example: Optional[str] = None

    class Config:
        frozen = True
        from_attributes = True


class PracticeSession(BaseModel):
    """State of a practice session."""
    deck_id: int
    cards: Tuple[Card, ...]
    cursor: int = 0
    showing_answer: bool = False
    correct_count: int = 0
    hard_count: int = 0
    total_viewed: int = 0
    failed_card_ids: FrozenSet[int] = frozenset()
    session_start: datetime
    card_show_time: Optional[datetime] = None
    total_answer_delay_ms: int = 0
    answer_delay_counted: bool = False  # Per card; reset when the card is labeled

    class Config:
        frozen = True

    @classmethod
    def create(
        cls,
        deck_id: int,
        cards: Sequence,
        session_start: datetime
    ) -> "PracticeSession":
        """
        Build a fresh session with zeroed counters.

        Args:
            deck_id: Deck being practiced (must be positive)
            cards: Flashcard rows or Card snapshots, in practice order
            session_start: Timestamp used for elapsed-time reporting

        Raises:
            ValidationError: If deck_id is not positive
            EmptySessionError: If there are no cards
        """
        if deck_id is None or deck_id <= 0:
            raise ValidationError(f"Deck ID must be positive, got: {deck_id}")
        if not cards:
            raise EmptySessionError(f"No cards to practice in deck {deck_id}")

        snapshots = tuple(
            card if isinstance(card, Card) else Card.model_validate(card)
            for card in cards
        )
        return cls(deck_id=deck_id, cards=snapshots, session_start=session_start)

    @property
    def card_ids(self) -> Tuple[int, ...]:
        return tuple(card.id for card in self.cards)
