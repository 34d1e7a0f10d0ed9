"""
Deck model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

from flashdeck.core.clock import utc_now

if TYPE_CHECKING:
    from flashdeck.models.flashcard import Flashcard


class Deck(SQLModel, table=True):
    """Deck table - a named collection of flashcards owned by a user."""
    __tablename__ = "deck"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)  # Owner; authentication lives outside this service
    title: str = Field(max_length=120)
    description: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Relationships
    flashcards: List["Flashcard"] = Relationship(back_populates="deck")
