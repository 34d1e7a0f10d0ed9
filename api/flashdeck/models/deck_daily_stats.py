"""
DeckDailyStats model.
"""
from sqlmodel import SQLModel, Field
import datetime as dt


class DeckDailyStats(SQLModel, table=True):
    """DeckDailyStats table - practice totals accumulated per deck per day."""
    __tablename__ = "deck_daily_stats"

    deck_id: int = Field(foreign_key="deck.id", primary_key=True)
    stat_date: dt.date = Field(primary_key=True)
    sessions: int = Field(default=0, ge=0)
    viewed: int = Field(default=0, ge=0)
    correct: int = Field(default=0, ge=0)
    repeat_count: int = Field(default=0, ge=0)
    hard: int = Field(default=0, ge=0)
    total_duration_ms: int = Field(default=0, ge=0)
    total_answer_delay_ms: int = Field(default=0, ge=0)
