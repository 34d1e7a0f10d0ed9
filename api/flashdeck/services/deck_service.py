"""
Deck service for business logic related to decks and their flashcards.
"""
# pyright: reportAttributeAccessIssue=false
import logging
from typing import List, Optional
from sqlmodel import Session, select

from flashdeck.core.clock import utc_now
from flashdeck.core.exceptions import NotFoundError, ValidationError
from flashdeck.models.models import Deck, DeckDailyStats, Flashcard, KnownCard

logger = logging.getLogger(__name__)

DECK_TITLE_MAX_LENGTH = 120
DECK_DESCRIPTION_MAX_LENGTH = 500
CARD_TEXT_MAX_LENGTH = 300
CARD_EXAMPLE_MAX_LENGTH = 500


def _clean_required(value: Optional[str], field: str, max_length: int) -> str:
    cleaned = value.strip() if value is not None else ""
    if not cleaned:
        raise ValidationError(f"{field} is required")
    if len(cleaned) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return cleaned


def _clean_optional(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    if len(cleaned) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return cleaned


# --- Decks ---

def create_deck(
    session: Session,
    user_id: int,
    title: str,
    description: Optional[str] = None
) -> Deck:
    """
    Create a deck for a user.

    Raises:
        ValidationError: If the title is blank or any text is too long
    """
    deck = Deck(
        user_id=user_id,
        title=_clean_required(title, "title", DECK_TITLE_MAX_LENGTH),
        description=_clean_optional(description, "description", DECK_DESCRIPTION_MAX_LENGTH),
    )
    session.add(deck)
    session.commit()
    session.refresh(deck)
    logger.info(f"Created deck {deck.id} for user {user_id}")
    return deck


def get_deck(session: Session, deck_id: int) -> Deck:
    """
    Raises:
        NotFoundError: If no deck has this id
    """
    deck = session.get(Deck, deck_id)
    if not deck:
        raise NotFoundError(f"Deck not found: {deck_id}")
    return deck


def list_decks(session: Session, user_id: int) -> List[Deck]:
    """Decks owned by a user, most recently created first."""
    return list(session.exec(
        select(Deck)
        .where(Deck.user_id == user_id)
        .order_by(Deck.created_at.desc(), Deck.id.desc())  # type: ignore
    ).all())


def update_deck(
    session: Session,
    deck_id: int,
    title: Optional[str] = None,
    description: Optional[str] = None
) -> Deck:
    """Update the provided fields of a deck; an empty description clears it."""
    deck = get_deck(session, deck_id)
    if title is not None:
        deck.title = _clean_required(title, "title", DECK_TITLE_MAX_LENGTH)
    if description is not None:
        deck.description = _clean_optional(description, "description", DECK_DESCRIPTION_MAX_LENGTH)
    deck.updated_at = utc_now()

    session.add(deck)
    session.commit()
    session.refresh(deck)
    return deck


def delete_deck(session: Session, deck_id: int) -> None:
    """
    Delete a deck together with its flashcards, known marks and stats.

    Rows are deleted children first to respect foreign key constraints.
    """
    deck = get_deck(session, deck_id)

    known_rows = session.exec(select(KnownCard).where(KnownCard.deck_id == deck_id)).all()
    for row in known_rows:
        session.delete(row)

    stats_rows = session.exec(select(DeckDailyStats).where(DeckDailyStats.deck_id == deck_id)).all()
    for row in stats_rows:
        session.delete(row)

    cards = session.exec(select(Flashcard).where(Flashcard.deck_id == deck_id)).all()
    for card in cards:
        session.delete(card)

    session.delete(deck)
    session.commit()

    logger.info(
        f"Deleted deck {deck_id}: {len(cards)} flashcards, "
        f"{len(known_rows)} known marks, {len(stats_rows)} daily stats rows"
    )


# --- Flashcards ---

def create_flashcard(
    session: Session,
    deck_id: int,
    front_text: str,
    back_text: str,
    example: Optional[str] = None,
    image_url: Optional[str] = None
) -> Flashcard:
    """
    Add a flashcard to an existing deck.

    Raises:
        NotFoundError: If the deck does not exist
        ValidationError: If front or back text is blank or too long
    """
    deck = get_deck(session, deck_id)
    card = Flashcard(
        deck_id=deck.id,
        front_text=_clean_required(front_text, "front_text", CARD_TEXT_MAX_LENGTH),
        back_text=_clean_required(back_text, "back_text", CARD_TEXT_MAX_LENGTH),
        example=_clean_optional(example, "example", CARD_EXAMPLE_MAX_LENGTH),
        image_url=image_url.strip() if image_url and image_url.strip() else None,
    )
    deck.updated_at = utc_now()
    session.add(card)
    session.add(deck)
    session.commit()
    session.refresh(card)
    return card


def get_flashcard(session: Session, card_id: int) -> Flashcard:
    card = session.get(Flashcard, card_id)
    if not card:
        raise NotFoundError(f"Flashcard not found: {card_id}")
    return card


def get_flashcards_by_deck_id(session: Session, deck_id: int) -> List[Flashcard]:
    """Flashcards of a deck in creation order."""
    return list(session.exec(
        select(Flashcard)
        .where(Flashcard.deck_id == deck_id)
        .order_by(Flashcard.id)  # type: ignore
    ).all())


def update_flashcard(
    session: Session,
    card_id: int,
    front_text: Optional[str] = None,
    back_text: Optional[str] = None,
    example: Optional[str] = None,
    image_url: Optional[str] = None
) -> Flashcard:
    card = get_flashcard(session, card_id)
    if front_text is not None:
        card.front_text = _clean_required(front_text, "front_text", CARD_TEXT_MAX_LENGTH)
    if back_text is not None:
        card.back_text = _clean_required(back_text, "back_text", CARD_TEXT_MAX_LENGTH)
    if example is not None:
        card.example = _clean_optional(example, "example", CARD_EXAMPLE_MAX_LENGTH)
    if image_url is not None:
        card.image_url = image_url.strip() or None
    card.updated_at = utc_now()

    session.add(card)
    session.commit()
    session.refresh(card)
    return card


def delete_flashcard(session: Session, card_id: int) -> None:
    """Delete a flashcard and its known mark, if any."""
    card = get_flashcard(session, card_id)
    known_rows = session.exec(select(KnownCard).where(KnownCard.card_id == card_id)).all()
    for row in known_rows:
        session.delete(row)
    session.delete(card)
    session.commit()
    logger.info(f"Deleted flashcard {card_id} from deck {card.deck_id}")
