"""
Flashcards endpoint.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from flashdeck.core.database import get_session
from flashdeck.core.exceptions import NotFoundError
from flashdeck.schemas.flashcard import (
    FlashcardResponse,
    CreateFlashcardRequest,
    UpdateFlashcardRequest,
    FlashcardsResponse
)
from flashdeck.services import deck_service, stats_service

router = APIRouter(prefix="/decks/{deck_id}/flashcards", tags=["flashcards"])


def get_card_in_deck(session: Session, deck_id: int, card_id: int):
    card = deck_service.get_flashcard(session, card_id)
    if card.deck_id != deck_id:
        raise NotFoundError(f"Flashcard {card_id} not found in deck {deck_id}")
    return card


@router.get("", response_model=FlashcardsResponse)
async def get_flashcards(
    deck_id: int,
    session: Session = Depends(get_session)
):
    """Get all flashcards of a deck with their known status."""
    deck_service.get_deck(session, deck_id)
    known = stats_service.get_known_card_ids(session, deck_id)
    cards = deck_service.get_flashcards_by_deck_id(session, deck_id)

    responses = []
    for card in cards:
        response = FlashcardResponse.model_validate(card)
        response.known = card.id in known
        responses.append(response)
    return FlashcardsResponse(flashcards=responses)


@router.post("", response_model=FlashcardResponse, status_code=status.HTTP_201_CREATED)
async def create_flashcard(
    deck_id: int,
    request: CreateFlashcardRequest,
    session: Session = Depends(get_session)
):
    card = deck_service.create_flashcard(
        session,
        deck_id,
        request.front_text,
        request.back_text,
        example=request.example,
        image_url=request.image_url
    )
    return FlashcardResponse.model_validate(card)


@router.put("/{card_id}", response_model=FlashcardResponse)
async def update_flashcard(
    deck_id: int,
    card_id: int,
    request: UpdateFlashcardRequest,
    session: Session = Depends(get_session)
):
    get_card_in_deck(session, deck_id, card_id)
    card = deck_service.update_flashcard(
        session,
        card_id,
        front_text=request.front_text,
        back_text=request.back_text,
        example=request.example,
        image_url=request.image_url
    )
    response = FlashcardResponse.model_validate(card)
    response.known = stats_service.is_card_known(session, deck_id, card_id)
    return response


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_flashcard(
    deck_id: int,
    card_id: int,
    session: Session = Depends(get_session)
):
    get_card_in_deck(session, deck_id, card_id)
    deck_service.delete_flashcard(session, card_id)
