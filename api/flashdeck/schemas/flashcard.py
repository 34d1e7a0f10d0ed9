"""
Flashcard schemas.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class FlashcardResponse(BaseModel):
    """Flashcard response schema."""
    id: int
    deck_id: int
    front_text: str
    back_text: str
    example: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    known: bool = False

    class Config:
        from_attributes = True


class CreateFlashcardRequest(BaseModel):
    """Request schema for creating a flashcard."""
    front_text: str
    back_text: str
    example: Optional[str] = None
    image_url: Optional[str] = None


class UpdateFlashcardRequest(BaseModel):
    """Request schema for updating a flashcard."""
    front_text: Optional[str] = None
    back_text: Optional[str] = None
    example: Optional[str] = None
    image_url: Optional[str] = None


class FlashcardsResponse(BaseModel):
    """Response schema for flashcards list."""
    flashcards: List[FlashcardResponse]
