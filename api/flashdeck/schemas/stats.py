"""
Stats schemas.
"""
from pydantic import BaseModel
from typing import List
from datetime import date


class DailyStatsResponse(BaseModel):
    """One day of practice totals for a deck."""
    stat_date: date
    sessions: int
    viewed: int
    correct: int
    repeat_count: int
    hard: int
    total_duration_ms: int
    total_answer_delay_ms: int

    class Config:
        from_attributes = True


class DeckStatsResponse(BaseModel):
    """Progress and history of a deck."""
    deck_id: int
    card_count: int
    known_count: int
    progress_percent: int
    daily: List[DailyStatsResponse]


class CardKnownRequest(BaseModel):
    """Request schema for setting a card's known status."""
    known: bool


class CardKnownResponse(BaseModel):
    deck_id: int
    card_id: int
    known: bool


class ResetProgressResponse(BaseModel):
    deck_id: int
    cleared_cards: int


class DeckAggregateResponse(BaseModel):
    """All-time and today's practice totals of one deck, for the deck list."""
    deck_id: int
    sessions_all: int = 0
    viewed_all: int = 0
    correct_all: int = 0
    repeat_all: int = 0
    hard_all: int = 0
    sessions_today: int = 0
    viewed_today: int = 0
    correct_today: int = 0
    repeat_today: int = 0
    hard_today: int = 0


class DeckAggregatesResponse(BaseModel):
    decks: List[DeckAggregateResponse]
