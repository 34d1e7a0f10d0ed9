"""
Practice session preparation: which cards enter a session and in what order.
"""
import logging
import random
from typing import Iterable, List, Optional, Sequence

from flashdeck.core.clock import SessionClock, system_clock
from flashdeck.core.exceptions import EmptySessionError, ValidationError
from flashdeck.models.models import Flashcard, PracticeDirection, PracticeSession
from flashdeck.services.repositories import FlashcardRepository, PreferencesStore

logger = logging.getLogger(__name__)


class SessionPreparationService:
    """
    Builds practice sessions from a deck's not-yet-known cards.

    Args:
        repository: Source of flashcards and known-card status
        preferences: The current user's practice defaults
        clock: Source of the session start time
        rng: Random source for shuffling (defaults to a fresh random.Random)
    """

    def __init__(
        self,
        repository: FlashcardRepository,
        preferences: PreferencesStore,
        clock: SessionClock = system_clock,
        rng: Optional[random.Random] = None
    ):
        self.repository = repository
        self.preferences = preferences
        self.clock = clock
        self.rng = rng or random.Random()

    def get_not_known_cards(self, deck_id: int) -> List[Flashcard]:
        """Cards of the deck not yet marked known; empty when all are known."""
        self._require_deck_id(deck_id)
        return list(self.repository.get_not_known_cards(deck_id))

    def resolve_default_count(self, candidate_cards: Sequence) -> int:
        """
        The user's default session size, capped at the number of candidates.

        Returns 0 only when there are no candidates.
        """
        available = len(candidate_cards)
        if available == 0:
            return 0
        configured = max(1, self.preferences.get_default_count())
        return min(configured, available)

    def is_random(self) -> bool:
        return self.preferences.is_default_random_order()

    def default_direction(self) -> PracticeDirection:
        return self.preferences.get_default_direction() or PracticeDirection.FRONT_TO_BACK

    def start_session(self, deck_id: int, count: int, random_order: bool) -> PracticeSession:
        """
        Start a session over up to ``count`` not-known cards of the deck.

        Random sessions shuffle the full candidate list before truncating, so
        the result is a random subset rather than a shuffled prefix.

        Raises:
            ValidationError: If deck_id or count is not positive
            EmptySessionError: If the deck has no not-known cards
        """
        cards = self.get_not_known_cards(deck_id)
        return self.start_session_with_cards(deck_id, cards, count, random_order)

    def start_session_with_cards(
        self,
        deck_id: int,
        cards: Iterable,
        count: int,
        random_order: bool
    ) -> PracticeSession:
        """Same as start_session, over cards the caller already loaded."""
        self._require_deck_id(deck_id)
        if count is None or count <= 0:
            raise ValidationError(f"Session size must be positive, got: {count}")

        selected = list(cards)
        if not selected:
            raise EmptySessionError(f"All cards in deck {deck_id} are already known")

        if random_order:
            self.rng.shuffle(selected)
        selected = selected[:count]

        session = PracticeSession.create(deck_id, selected, self.clock.now())
        logger.info(
            f"Started practice session for deck {deck_id}: {len(session.cards)} cards, "
            f"random={random_order}"
        )
        return session

    def get_failed_cards(self, deck_id: int, failed_card_ids: Iterable[int]) -> List[Flashcard]:
        """Failed cards that are still not known, in deck order."""
        failed = set(failed_card_ids or ())
        if not failed:
            return []
        return [card for card in self.get_not_known_cards(deck_id) if card.id in failed]

    def start_repeat_session(self, deck_id: int, failed_cards: Iterable) -> PracticeSession:
        """
        Start a fresh session over exactly the given failed cards, shuffled.

        Raises:
            EmptySessionError: If failed_cards is empty
        """
        self._require_deck_id(deck_id)
        cards = list(failed_cards)
        if not cards:
            raise EmptySessionError(f"No failed cards to repeat in deck {deck_id}")
        self.rng.shuffle(cards)

        session = PracticeSession.create(deck_id, cards, self.clock.now())
        logger.info(f"Started repeat session for deck {deck_id}: {len(session.cards)} cards")
        return session

    @staticmethod
    def _require_deck_id(deck_id: int) -> None:
        if deck_id is None or deck_id <= 0:
            raise ValidationError(f"Deck ID must be positive, got: {deck_id}")
