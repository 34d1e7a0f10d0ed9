"""
Decks endpoint.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from flashdeck.core.database import get_session
from flashdeck.models.models import Deck
from flashdeck.schemas.deck import (
    DeckResponse,
    CreateDeckRequest,
    UpdateDeckRequest,
    DecksResponse
)
from flashdeck.services import deck_service, stats_service

router = APIRouter(prefix="/decks", tags=["decks"])


def to_deck_response(session: Session, deck: Deck) -> DeckResponse:
    """Deck with its card count and share of known cards."""
    card_count = len(deck_service.get_flashcards_by_deck_id(session, deck.id))
    response = DeckResponse.model_validate(deck)
    response.card_count = card_count
    response.progress_percent = stats_service.get_deck_progress_percent(session, deck.id, card_count)
    return response


@router.get("", response_model=DecksResponse)
async def get_decks(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Get a user's decks, most recent first."""
    decks = deck_service.list_decks(session, user_id)
    return DecksResponse(decks=[to_deck_response(session, deck) for deck in decks])


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(
    request: CreateDeckRequest,
    session: Session = Depends(get_session)
):
    """Create a new deck."""
    deck = deck_service.create_deck(session, request.user_id, request.title, request.description)
    return to_deck_response(session, deck)


@router.get("/{deck_id}", response_model=DeckResponse)
async def get_deck(
    deck_id: int,
    session: Session = Depends(get_session)
):
    return to_deck_response(session, deck_service.get_deck(session, deck_id))


@router.put("/{deck_id}", response_model=DeckResponse)
async def update_deck(
    deck_id: int,
    request: UpdateDeckRequest,
    session: Session = Depends(get_session)
):
    """Update a deck by ID."""
    deck = deck_service.update_deck(session, deck_id, request.title, request.description)
    return to_deck_response(session, deck)


@router.delete("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deck(
    deck_id: int,
    session: Session = Depends(get_session)
):
    """Delete a deck with all its flashcards and progress."""
    deck_service.delete_deck(session, deck_id)
