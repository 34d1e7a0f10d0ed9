"""
Deck schemas.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class DeckResponse(BaseModel):
    """Deck response schema."""
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    card_count: int = 0
    progress_percent: int = 0

    class Config:
        from_attributes = True


class CreateDeckRequest(BaseModel):
    """Request schema for creating a deck."""
    user_id: int
    title: str
    description: Optional[str] = None


class UpdateDeckRequest(BaseModel):
    """Request schema for updating a deck."""
    title: Optional[str] = None
    description: Optional[str] = None


class DecksResponse(BaseModel):
    """Response schema for decks list."""
    decks: List[DeckResponse]
