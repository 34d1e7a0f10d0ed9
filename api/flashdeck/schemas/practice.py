"""
Practice session schemas.
"""
from pydantic import BaseModel
from typing import List, Optional
from flashdeck.models.enums import PracticeDirection


class StartPracticeRequest(BaseModel):
    """Request schema for starting a practice session.

    count, random_order and direction fall back to the user's settings when omitted.
    """
    user_id: int
    deck_id: int
    count: Optional[int] = None
    random_order: Optional[bool] = None
    direction: Optional[PracticeDirection] = None


class PracticeCardResponse(BaseModel):
    """The card on screen, oriented by the session direction."""
    id: int
    question: str
    answer: Optional[str] = None  # Only present once revealed
    example: Optional[str] = None


class ProgressResponse(BaseModel):
    current: int
    total: int
    total_viewed: int
    correct: int
    hard: int
    percent: int


class PracticeStateResponse(BaseModel):
    """State of a practice session after any operation."""
    session_id: str
    deck_id: int
    direction: PracticeDirection
    complete: bool
    showing_answer: bool
    card: Optional[PracticeCardResponse] = None
    progress: ProgressResponse
    failed_card_ids: List[int] = []


class CompletePracticeResponse(BaseModel):
    """Completion summary returned when a session is finished."""
    session_id: str
    deck_id: int
    total_cards: int
    session_minutes: int
    avg_seconds: int
    correct: int
    hard: int
    known_card_ids: List[int]
    failed_card_ids: List[int]
    can_repeat: bool


class RepeatPracticeRequest(BaseModel):
    """Request schema for practicing the failed cards of a finished session again."""
    user_id: int
    deck_id: int
    failed_card_ids: List[int]
    direction: Optional[PracticeDirection] = None
