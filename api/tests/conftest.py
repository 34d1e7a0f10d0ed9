import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Settings refuse to load without a database URL
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from flashdeck.core.database import get_session
from flashdeck.core.exceptions import RepositoryFailure
from flashdeck.main import app
from flashdeck.models import models  # noqa: F401
from flashdeck.models.enums import PracticeDirection
from flashdeck.models.practice_session import Card
from flashdeck.services.session_store import practice_store


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start=None):
        self.current = start or datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)

    def now(self):
        return self.current

    def advance(self, seconds=0, ms=0):
        self.current = self.current + timedelta(seconds=seconds, milliseconds=ms)


class InMemoryFlashcardRepository:
    """Flashcard repository over plain lists, for tests of the practice core."""

    def __init__(self, cards_by_deck=None):
        self.cards_by_deck = cards_by_deck or {}
        self.known = {}
        self.sessions = []
        self.fail_writes = False

    def get_flashcards_by_deck_id(self, deck_id):
        return list(self.cards_by_deck.get(deck_id, []))

    def get_known_card_ids(self, deck_id):
        return set(self.known.get(deck_id, set()))

    def get_not_known_cards(self, deck_id):
        known = self.get_known_card_ids(deck_id)
        return [card for card in self.get_flashcards_by_deck_id(deck_id) if card.id not in known]

    def mark_known(self, deck_id, card_id):
        self.mark_known_batch(deck_id, [card_id])

    def mark_known_batch(self, deck_id, card_ids):
        if self.fail_writes:
            raise RepositoryFailure("store rejected write")
        self.known.setdefault(deck_id, set()).update(card_ids)

    def append_session(self, stats):
        if self.fail_writes:
            raise RepositoryFailure("store rejected write")
        self.sessions.append(stats)
        self.known.setdefault(stats.deck_id, set()).update(stats.known_card_ids_delta)


class InMemoryPreferences:
    def __init__(self, count=10, random_order=True, direction=PracticeDirection.FRONT_TO_BACK):
        self.count = count
        self.random_order = random_order
        self.direction = direction

    def get_default_count(self):
        return self.count

    def set_default_count(self, count):
        self.count = max(1, count)

    def is_default_random_order(self):
        return self.random_order

    def set_default_random_order(self, random_order):
        self.random_order = random_order

    def get_default_direction(self):
        return self.direction

    def set_default_direction(self, direction):
        self.direction = direction


def make_cards(n, start_id=1):
    return [
        Card(id=i, front_text=f"front {i}", back_text=f"back {i}")
        for i in range(start_id, start_id + n)
    ]


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def db_engine():
    db_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(db_engine)
    yield db_engine
    SQLModel.metadata.drop_all(db_engine)


@pytest.fixture
def session(db_engine):
    with Session(db_engine) as db_session:
        yield db_session


@pytest.fixture
def client(session):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    practice_store.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
    practice_store.clear()
