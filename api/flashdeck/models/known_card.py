"""
KnownCard model.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from typing import Optional
from datetime import datetime

from flashdeck.core.clock import utc_now


class KnownCard(SQLModel, table=True):
    """KnownCard table - presence of a row marks the card as known."""
    __tablename__ = "known_card"
    __table_args__ = (
        UniqueConstraint("deck_id", "card_id", name="uq_known_card_deck_card"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    deck_id: int = Field(foreign_key="deck.id", index=True)
    card_id: int = Field(foreign_key="flashcard.id")
    created_at: datetime = Field(default_factory=utc_now)
