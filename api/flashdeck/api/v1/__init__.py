"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from flashdeck.api.v1.endpoints import decks, flashcards, practice, stats, settings

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(decks.router)
api_router.include_router(flashcards.router)
api_router.include_router(practice.router)
api_router.include_router(stats.router)
api_router.include_router(settings.router)
