"""
Stats service for practice statistics and known-card tracking.

Known cards are stored as rows in ``known_card``; practice totals are
accumulated per deck per day in ``deck_daily_stats``.
"""
# pyright: reportAttributeAccessIssue=false
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Set
from pydantic import BaseModel
from sqlmodel import Session, select

from flashdeck.core.exceptions import NotFoundError, ValidationError
from flashdeck.models.models import Deck, DeckDailyStats, KnownCard
from flashdeck.utils.number_utils import round_half_up

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("flashdeck.audit")


class SessionStats(BaseModel):
    """Totals of one finished practice session, ready to be recorded."""
    deck_id: int
    viewed: int
    correct: int
    hard: int
    repeat: int = 0
    session_duration_ms: int = 0
    total_answer_delay_ms: int = 0
    known_card_ids_delta: List[int] = []


class DeckAggregate(BaseModel):
    """All-time and today's practice totals for a deck."""
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


def validate_session_stats(stats: SessionStats) -> None:
    """
    Check that session totals are consistent before they are recorded.

    Raises:
        ValidationError: On a non-positive deck id or viewed count, or any
            negative counter or duration
    """
    if stats.deck_id <= 0:
        raise ValidationError(f"Deck ID must be positive, got: {stats.deck_id}")
    if stats.viewed <= 0:
        raise ValidationError(f"Viewed count must be positive, got: {stats.viewed}")
    for name in ("correct", "hard", "repeat", "session_duration_ms", "total_answer_delay_ms"):
        value = getattr(stats, name)
        if value < 0:
            raise ValidationError(f"{name} cannot be negative, got: {value}")


def get_known_card_ids(session: Session, deck_id: int) -> Set[int]:
    """Return the ids of all cards marked known in a deck."""
    rows = session.exec(
        select(KnownCard.card_id).where(KnownCard.deck_id == deck_id)
    ).all()
    return set(rows)


def is_card_known(session: Session, deck_id: int, card_id: int) -> bool:
    known = session.exec(
        select(KnownCard).where(
            KnownCard.deck_id == deck_id,
            KnownCard.card_id == card_id
        )
    ).first()
    return known is not None


def add_known_cards(session: Session, deck_id: int, card_ids: Iterable[int]) -> int:
    """
    Stage known marks for the given cards without committing.

    Cards already known are skipped, as are duplicates within card_ids.

    Returns:
        Number of newly marked cards
    """
    existing = get_known_card_ids(session, deck_id)
    added = 0
    for card_id in card_ids:
        if card_id in existing:
            continue
        session.add(KnownCard(deck_id=deck_id, card_id=card_id))
        existing.add(card_id)
        added += 1
    return added


def mark_cards_known(session: Session, deck_id: int, card_ids: Iterable[int]) -> int:
    """Mark several cards known in one transaction."""
    added = add_known_cards(session, deck_id, card_ids)
    session.commit()
    logger.info(f"Marked {added} card(s) known in deck {deck_id}")
    return added


def record_session(
    session: Session,
    stats: SessionStats,
    today: Optional[date] = None
) -> bool:
    """
    Append a finished session to the deck's daily stats and apply its
    known-card delta, in a single transaction.

    Sessions with no viewed cards are skipped.

    Args:
        session: Database session
        stats: Session totals
        today: Date to record against (defaults to today)

    Returns:
        True if the session was recorded, False if it was skipped

    Raises:
        ValidationError: If the totals are inconsistent
    """
    logger.debug(
        f"Recording session: deck_id={stats.deck_id}, viewed={stats.viewed}, "
        f"correct={stats.correct}, hard={stats.hard}"
    )

    if stats.viewed <= 0:
        logger.warning(f"Skipped recording session with invalid viewed count: {stats.viewed}")
        return False

    validate_session_stats(stats)
    today = today or date.today()

    daily = session.get(DeckDailyStats, (stats.deck_id, today))
    if daily is None:
        daily = DeckDailyStats(deck_id=stats.deck_id, stat_date=today)

    daily.sessions += 1
    daily.viewed += stats.viewed
    daily.correct += stats.correct
    daily.repeat_count += stats.repeat
    daily.hard += stats.hard
    daily.total_duration_ms += stats.session_duration_ms
    daily.total_answer_delay_ms += stats.total_answer_delay_ms
    session.add(daily)

    added = add_known_cards(session, stats.deck_id, stats.known_card_ids_delta)
    session.commit()

    logger.info(
        f"Session recorded: deck_id={stats.deck_id}, viewed={stats.viewed}, "
        f"correct={stats.correct}, hard={stats.hard}, "
        f"duration_ms={stats.session_duration_ms}, known_delta={added}"
    )
    return True


def set_card_known(session: Session, deck_id: int, card_id: int, known: bool) -> None:
    """Mark or unmark a single card as known."""
    logger.debug(f"Setting card {card_id} as {'KNOWN' if known else 'UNKNOWN'} for deck {deck_id}")

    if known:
        add_known_cards(session, deck_id, [card_id])
    else:
        rows = session.exec(
            select(KnownCard).where(
                KnownCard.deck_id == deck_id,
                KnownCard.card_id == card_id
            )
        ).all()
        for row in rows:
            session.delete(row)
    session.commit()

    logger.info(f"Card marked as {'known' if known else 'unknown'} in deck {deck_id}: card_id={card_id}")


def toggle_card_known(session: Session, deck_id: int, card_id: int) -> bool:
    """
    Flip a card's known status.

    Returns:
        The new status
    """
    new_status = not is_card_known(session, deck_id, card_id)
    set_card_known(session, deck_id, card_id, new_status)
    return new_status


def reset_deck_progress(session: Session, deck_id: int) -> int:
    """
    Clear every known mark in a deck.

    Returns:
        Number of cleared known marks

    Raises:
        NotFoundError: If the deck does not exist
    """
    deck = session.get(Deck, deck_id)
    if not deck:
        raise NotFoundError(f"Deck not found: {deck_id}")

    known_rows = session.exec(
        select(KnownCard).where(KnownCard.deck_id == deck_id)
    ).all()
    cleared = len(known_rows)
    for row in known_rows:
        session.delete(row)
    session.commit()

    audit_logger.warning(
        f"Deck progress reset: deck_id={deck_id}, title='{deck.title}', "
        f"user_id={deck.user_id}, cleared_cards={cleared}"
    )
    logger.info(f"Deck progress reset successfully: deck_id={deck_id}, cleared {cleared} known cards")
    return cleared


def get_deck_progress_percent(session: Session, deck_id: int, deck_size: int) -> int:
    """Percentage of a deck's cards that are known, clamped to 0..100."""
    if deck_size <= 0:
        return 0
    known = len(get_known_card_ids(session, deck_id))
    percent = round_half_up(100.0 * known / deck_size)
    return max(0, min(100, percent))


def get_daily_stats(session: Session, deck_id: int) -> List[DeckDailyStats]:
    """Daily stats rows for a deck, oldest first."""
    return list(session.exec(
        select(DeckDailyStats)
        .where(DeckDailyStats.deck_id == deck_id)
        .order_by(DeckDailyStats.stat_date)  # type: ignore
    ).all())


def get_deck_aggregates(
    session: Session,
    deck_ids: Iterable[int],
    today: Optional[date] = None
) -> Dict[int, DeckAggregate]:
    """
    Sum daily stats per deck, both over all time and for today only.

    Decks without any recorded sessions are absent from the result.
    """
    ids = sorted(set(deck_ids))
    if not ids:
        return {}
    today = today or date.today()

    rows = session.exec(
        select(DeckDailyStats).where(DeckDailyStats.deck_id.in_(ids))  # type: ignore
    ).all()

    result: Dict[int, DeckAggregate] = {}
    for row in rows:
        agg = result.setdefault(row.deck_id, DeckAggregate())
        agg.sessions_all += row.sessions
        agg.viewed_all += row.viewed
        agg.correct_all += row.correct
        agg.repeat_all += row.repeat_count
        agg.hard_all += row.hard
        if row.stat_date == today:
            agg.sessions_today += row.sessions
            agg.viewed_today += row.viewed
            agg.correct_today += row.correct
            agg.repeat_today += row.repeat_count
            agg.hard_today += row.hard
    return result
