"""
Collaborators used by the practice services.

The practice engine, preparation service and completion recorder depend on
the two protocols below rather than on a database session, so they can be
driven by any store. ``SqlFlashcardRepository`` and ``SqlPreferencesStore``
back them with the application database.
"""
import logging
from typing import Iterable, List, Protocol, Set
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from flashdeck.core.exceptions import RepositoryFailure
from flashdeck.models.models import Flashcard, PracticeDirection
from flashdeck.services import deck_service, settings_service, stats_service
from flashdeck.services.stats_service import SessionStats

logger = logging.getLogger(__name__)


class FlashcardRepository(Protocol):
    def get_flashcards_by_deck_id(self, deck_id: int) -> List[Flashcard]: ...

    def get_not_known_cards(self, deck_id: int) -> List[Flashcard]: ...

    def get_known_card_ids(self, deck_id: int) -> Set[int]: ...

    def mark_known(self, deck_id: int, card_id: int) -> None: ...

    def mark_known_batch(self, deck_id: int, card_ids: Iterable[int]) -> None: ...

    def append_session(self, stats: SessionStats) -> None: ...


class PreferencesStore(Protocol):
    def get_default_count(self) -> int: ...

    def set_default_count(self, count: int) -> None: ...

    def is_default_random_order(self) -> bool: ...

    def set_default_random_order(self, random_order: bool) -> None: ...

    def get_default_direction(self) -> PracticeDirection: ...

    def set_default_direction(self, direction: PracticeDirection) -> None: ...


class SqlFlashcardRepository:
    """Flashcard repository backed by a database session.

    Every database error is rolled back and re-raised as RepositoryFailure.
    """

    def __init__(self, session: Session):
        self.session = session

    def _fail(self, action: str, exc: SQLAlchemyError) -> RepositoryFailure:
        self.session.rollback()
        logger.error(f"Repository failure while {action}: {exc}")
        return RepositoryFailure(f"Failed while {action}")

    def get_flashcards_by_deck_id(self, deck_id: int) -> List[Flashcard]:
        try:
            return deck_service.get_flashcards_by_deck_id(self.session, deck_id)
        except SQLAlchemyError as e:
            raise self._fail(f"loading flashcards of deck {deck_id}", e) from e

    def get_known_card_ids(self, deck_id: int) -> Set[int]:
        try:
            return stats_service.get_known_card_ids(self.session, deck_id)
        except SQLAlchemyError as e:
            raise self._fail(f"loading known cards of deck {deck_id}", e) from e

    def get_not_known_cards(self, deck_id: int) -> List[Flashcard]:
        cards = self.get_flashcards_by_deck_id(deck_id)
        known = self.get_known_card_ids(deck_id)
        return [card for card in cards if card.id not in known]

    def mark_known(self, deck_id: int, card_id: int) -> None:
        try:
            stats_service.set_card_known(self.session, deck_id, card_id, True)
        except SQLAlchemyError as e:
            raise self._fail(f"marking card {card_id} known", e) from e

    def mark_known_batch(self, deck_id: int, card_ids: Iterable[int]) -> None:
        try:
            stats_service.mark_cards_known(self.session, deck_id, card_ids)
        except SQLAlchemyError as e:
            raise self._fail(f"marking cards known in deck {deck_id}", e) from e

    def append_session(self, stats: SessionStats) -> None:
        try:
            stats_service.record_session(self.session, stats)
        except SQLAlchemyError as e:
            raise self._fail(f"recording session for deck {stats.deck_id}", e) from e


class SqlPreferencesStore:
    """Per-user practice preferences stored in the user_settings table."""

    def __init__(self, session: Session, user_id: int):
        self.session = session
        self.user_id = user_id

    def _load(self):
        try:
            return settings_service.get_or_create_settings(self.session, self.user_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryFailure(f"Failed loading settings of user {self.user_id}") from e

    def get_default_count(self) -> int:
        return self._load().default_count

    def set_default_count(self, count: int) -> None:
        settings_service.update_settings(self.session, self.user_id, default_count=count)

    def is_default_random_order(self) -> bool:
        return self._load().default_random_order

    def set_default_random_order(self, random_order: bool) -> None:
        settings_service.update_settings(self.session, self.user_id, default_random_order=random_order)

    def get_default_direction(self) -> PracticeDirection:
        return self._load().default_direction

    def set_default_direction(self, direction: PracticeDirection) -> None:
        settings_service.update_settings(self.session, self.user_id, default_direction=direction)
