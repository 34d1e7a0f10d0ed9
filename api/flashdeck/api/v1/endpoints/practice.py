"""
Practice session endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
import logging

from flashdeck.core.database import get_session
from flashdeck.core.exceptions import EmptySessionError
from flashdeck.models.enums import PracticeDirection
from flashdeck.schemas.practice import (
    StartPracticeRequest,
    RepeatPracticeRequest,
    PracticeCardResponse,
    ProgressResponse,
    PracticeStateResponse,
    CompletePracticeResponse,
)
from flashdeck.services import deck_service
from flashdeck.services.completion_service import CompletionRecorder
from flashdeck.services.practice_engine import SessionEngine
from flashdeck.services.practice_service import SessionPreparationService
from flashdeck.services.repositories import SqlFlashcardRepository, SqlPreferencesStore
from flashdeck.services.session_store import StoredPractice, practice_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/practice", tags=["practice"])

engine = SessionEngine()
recorder = CompletionRecorder()


def get_preparation_service(session: Session, user_id: int) -> SessionPreparationService:
    return SessionPreparationService(
        SqlFlashcardRepository(session),
        SqlPreferencesStore(session, user_id),
    )


def build_state(stored: StoredPractice) -> PracticeStateResponse:
    """Render a stored session as an API response."""
    practice = stored.practice
    card = None
    if not engine.is_complete(practice):
        current = engine.current_card(practice)
        if stored.direction == PracticeDirection.BACK_TO_FRONT:
            question, answer = current.back_text, current.front_text
        else:
            question, answer = current.front_text, current.back_text
        card = PracticeCardResponse(
            id=current.id,
            question=question,
            answer=answer if practice.showing_answer else None,
            example=current.example if practice.showing_answer else None,
        )

    progress = engine.progress(practice)
    return PracticeStateResponse(
        session_id=stored.session_id,
        deck_id=practice.deck_id,
        direction=stored.direction,
        complete=engine.is_complete(practice),
        showing_answer=practice.showing_answer,
        card=card,
        progress=ProgressResponse(**progress.model_dump()),
        failed_card_ids=sorted(practice.failed_card_ids),
    )


@router.post("/sessions", response_model=PracticeStateResponse, status_code=status.HTTP_201_CREATED)
async def start_practice(
    request: StartPracticeRequest,
    session: Session = Depends(get_session)
):
    """
    Start a practice session over the deck's not-yet-known cards.

    Omitted count, order and direction come from the user's settings.
    Returns 409 with type EmptySessionError when every card is already known.
    """
    deck_service.get_deck(session, request.deck_id)
    preparation = get_preparation_service(session, request.user_id)

    candidates = preparation.get_not_known_cards(request.deck_id)
    if not candidates:
        raise EmptySessionError(f"All cards in deck {request.deck_id} are already known")

    count = request.count if request.count is not None else preparation.resolve_default_count(candidates)
    random_order = request.random_order if request.random_order is not None else preparation.is_random()
    direction = request.direction or preparation.default_direction()

    practice = preparation.start_session_with_cards(request.deck_id, candidates, count, random_order)
    practice = engine.start_question(practice)

    stored = practice_store.add(request.user_id, direction, practice)
    return build_state(stored)


@router.post("/sessions/repeat", response_model=PracticeStateResponse, status_code=status.HTTP_201_CREATED)
async def repeat_practice(
    request: RepeatPracticeRequest,
    session: Session = Depends(get_session)
):
    """Start a new session over the failed cards of a finished one that are still not known."""
    deck_service.get_deck(session, request.deck_id)
    preparation = get_preparation_service(session, request.user_id)

    failed_cards = preparation.get_failed_cards(request.deck_id, request.failed_card_ids)
    practice = preparation.start_repeat_session(request.deck_id, failed_cards)
    practice = engine.start_question(practice)

    direction = request.direction or preparation.default_direction()
    stored = practice_store.add(request.user_id, direction, practice)
    return build_state(stored)


@router.get("/sessions/{session_id}", response_model=PracticeStateResponse)
async def get_practice(session_id: str):
    """Get the current state of a practice session."""
    return build_state(practice_store.get(session_id))


@router.post("/sessions/{session_id}/question", response_model=PracticeStateResponse)
async def show_question(session_id: str):
    """Show (or re-show) the current card's question."""
    stored = practice_store.get(session_id)
    practice = engine.start_question(stored.practice)
    return build_state(practice_store.update(session_id, practice))


@router.post("/sessions/{session_id}/reveal", response_model=PracticeStateResponse)
async def reveal_answer(session_id: str):
    """Reveal the current card's answer."""
    stored = practice_store.get(session_id)
    practice = engine.reveal(stored.practice)
    return build_state(practice_store.update(session_id, practice))


@router.post("/sessions/{session_id}/know", response_model=PracticeStateResponse)
async def mark_know(session_id: str):
    """Label the revealed card as known and move to the next question."""
    stored = practice_store.get(session_id)
    practice = engine.mark_know(stored.practice)
    if not engine.is_complete(practice):
        practice = engine.start_question(practice)
    return build_state(practice_store.update(session_id, practice))


@router.post("/sessions/{session_id}/hard", response_model=PracticeStateResponse)
async def mark_hard(session_id: str):
    """Label the revealed card as hard and move to the next question."""
    stored = practice_store.get(session_id)
    practice = engine.mark_hard(stored.practice)
    if not engine.is_complete(practice):
        practice = engine.start_question(practice)
    return build_state(practice_store.update(session_id, practice))


@router.post("/sessions/{session_id}/complete", response_model=CompletePracticeResponse)
async def complete_practice(
    session_id: str,
    session: Session = Depends(get_session)
):
    """
    Finish a practice session.

    Cards labeled know (and never hard) are marked known and the session
    totals are added to the deck's daily stats. The session is discarded
    afterwards; failed_card_ids can be passed to /sessions/repeat.
    """
    stored = practice_store.get(session_id)
    practice = stored.practice

    metrics = recorder.calculate_completion_metrics(practice)
    known_ids = recorder.record_and_persist(practice, SqlFlashcardRepository(session))
    practice_store.discard(session_id)

    preparation = get_preparation_service(session, stored.user_id)
    can_repeat = bool(preparation.get_failed_cards(practice.deck_id, practice.failed_card_ids))

    return CompletePracticeResponse(
        session_id=session_id,
        deck_id=practice.deck_id,
        total_cards=metrics.total_cards,
        session_minutes=metrics.session_minutes,
        avg_seconds=metrics.avg_seconds,
        correct=practice.correct_count,
        hard=practice.hard_count,
        known_card_ids=known_ids,
        failed_card_ids=sorted(practice.failed_card_ids),
        can_repeat=can_repeat,
    )


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def abandon_practice(session_id: str):
    """Abandon a practice session without recording anything."""
    practice_store.discard(session_id)
