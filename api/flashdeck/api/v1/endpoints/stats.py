"""
Deck statistics and known-card endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from flashdeck.core.database import get_session
from flashdeck.core.exceptions import NotFoundError
from flashdeck.schemas.stats import (
    DailyStatsResponse,
    DeckStatsResponse,
    DeckAggregateResponse,
    DeckAggregatesResponse,
    CardKnownRequest,
    CardKnownResponse,
    ResetProgressResponse
)
from flashdeck.services import deck_service, stats_service

router = APIRouter(prefix="/stats", tags=["stats"])


def require_card_in_deck(session: Session, deck_id: int, card_id: int) -> None:
    card = deck_service.get_flashcard(session, card_id)
    if card.deck_id != deck_id:
        raise NotFoundError(f"Flashcard {card_id} not found in deck {deck_id}")


@router.get("/decks", response_model=DeckAggregatesResponse)
async def get_deck_aggregates(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Practice totals of every deck a user owns; decks never practiced report zeros."""
    deck_ids = [deck.id for deck in deck_service.list_decks(session, user_id)]
    aggregates = stats_service.get_deck_aggregates(session, deck_ids)

    decks = []
    for deck_id in deck_ids:
        aggregate = aggregates.get(deck_id, stats_service.DeckAggregate())
        decks.append(DeckAggregateResponse(deck_id=deck_id, **aggregate.model_dump()))
    return DeckAggregatesResponse(decks=decks)


@router.get("/decks/{deck_id}", response_model=DeckStatsResponse)
async def get_deck_stats(
    deck_id: int,
    session: Session = Depends(get_session)
):
    """Known-card progress and daily practice history of a deck."""
    deck_service.get_deck(session, deck_id)
    card_count = len(deck_service.get_flashcards_by_deck_id(session, deck_id))
    known_count = len(stats_service.get_known_card_ids(session, deck_id))
    daily = stats_service.get_daily_stats(session, deck_id)

    return DeckStatsResponse(
        deck_id=deck_id,
        card_count=card_count,
        known_count=known_count,
        progress_percent=stats_service.get_deck_progress_percent(session, deck_id, card_count),
        daily=[DailyStatsResponse.model_validate(row) for row in daily],
    )


@router.put("/decks/{deck_id}/cards/{card_id}/known", response_model=CardKnownResponse)
async def set_card_known(
    deck_id: int,
    card_id: int,
    request: CardKnownRequest,
    session: Session = Depends(get_session)
):
    require_card_in_deck(session, deck_id, card_id)
    stats_service.set_card_known(session, deck_id, card_id, request.known)
    return CardKnownResponse(deck_id=deck_id, card_id=card_id, known=request.known)


@router.post("/decks/{deck_id}/cards/{card_id}/toggle-known", response_model=CardKnownResponse)
async def toggle_card_known(
    deck_id: int,
    card_id: int,
    session: Session = Depends(get_session)
):
    require_card_in_deck(session, deck_id, card_id)
    known = stats_service.toggle_card_known(session, deck_id, card_id)
    return CardKnownResponse(deck_id=deck_id, card_id=card_id, known=known)


@router.post("/decks/{deck_id}/reset", response_model=ResetProgressResponse)
async def reset_deck_progress(
    deck_id: int,
    session: Session = Depends(get_session)
):
    """Forget which cards of the deck are known. Daily stats are kept."""
    cleared = stats_service.reset_deck_progress(session, deck_id)
    return ResetProgressResponse(deck_id=deck_id, cleared_cards=cleared)
