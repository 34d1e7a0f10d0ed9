"""
Flashcard model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime

from flashdeck.core.clock import utc_now

if TYPE_CHECKING:
    from flashdeck.models.deck import Deck


class Flashcard(SQLModel, table=True):
    """Flashcard table - a front/back text pair with an optional usage example."""
    __tablename__ = "flashcard"

    id: Optional[int] = Field(default=None, primary_key=True)
    deck_id: int = Field(foreign_key="deck.id", index=True)
    front_text: str = Field(max_length=300)
    back_text: str = Field(max_length=300)
    example: Optional[str] = Field(default=None, max_length=500)
    image_url: Optional[str] = Field(default=None, max_length=2048)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Relationships
    deck: Optional["Deck"] = Relationship(back_populates="flashcards")
