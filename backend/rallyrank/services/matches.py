"""Two-party match reporting.

A reported result only becomes part of anyone's rating once the opponent
confirms it. Each match moves from ``pending`` to exactly one of
``confirmed`` or ``rejected`` and never leaves that state again.
"""

import enum
import logging
import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db_errors import is_concurrency_conflict
from ..exceptions import Forbidden, InvalidState, PersistenceConflict, ValidationError
from ..models import Match, MatchStatus
from ..scoring import tennis
from ..scoring.tennis import MatchWinner
from ..time_utils import require_utc, utc_now
from . import repository
from .rating import K_FACTOR, rating_delta
from .validation import decide_match, validate_participants, validate_set_scores

logger = logging.getLogger(__name__)


class Decision(str, enum.Enum):
    CONFIRM = "confirm"
    REJECT = "reject"


async def _commit(session: AsyncSession, match_id: str) -> None:
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        if is_concurrency_conflict(exc):
            logger.warning("Concurrent update lost on match %s: %s", match_id, exc)
            raise PersistenceConflict() from exc
        raise


async def propose_match(
    session: AsyncSession,
    reporter_id: str,
    opponent_id: str,
    winner_id: str,
    sets: Sequence[Any],
    *,
    played_at: Optional[datetime] = None,
) -> Match:
    """Record a result reported by ``reporter_id`` as a pending match.

    ``sets`` are read from the reporter's side (player 1). The declared
    winner has to agree with the set scores. Nothing about either player
    changes until the opponent confirms.
    """

    validate_participants(reporter_id, opponent_id, winner_id)
    played = validate_set_scores(sets)
    outcome = decide_match(played)

    expected_winner = reporter_id if outcome == MatchWinner.PLAYER1 else opponent_id
    if winner_id != expected_winner:
        raise ValidationError("winnerId does not match the submitted set scores.")
    try:
        played_at = require_utc(played_at, field_name="playedAt")
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    await repository.get_player(session, reporter_id)
    await repository.get_player(session, opponent_id)

    match = Match(
        id=uuid.uuid4().hex,
        player1_id=reporter_id,
        player2_id=opponent_id,
        winner_id=winner_id,
        reported_by_id=reporter_id,
        score=tennis.format_score(played, outcome),
        status=MatchStatus.PENDING.value,
        played_at=played_at,
        created_at=utc_now(),
    )
    await repository.create_match(session, match)
    await _commit(session, match.id)
    logger.info(
        "Match %s reported by %s against %s (%s), awaiting confirmation",
        match.id,
        reporter_id,
        opponent_id,
        match.score,
    )
    return match


def _check_responder(match: Match, responder_id: str) -> None:
    if responder_id not in match.participant_ids:
        logger.warning(
            "Player %s tried to respond to match %s without taking part",
            responder_id,
            match.id,
        )
        raise Forbidden("only the players in this match can respond to it")
    if responder_id == match.reported_by_id:
        logger.warning(
            "Player %s tried to respond to their own report on match %s",
            responder_id,
            match.id,
        )
        raise Forbidden("the reporting player cannot respond to their own match")


async def respond_to_match(
    session: AsyncSession,
    match_id: str,
    responder_id: str,
    decision: Decision,
    *,
    k: float = K_FACTOR,
) -> Match:
    """Confirm or reject a pending match on behalf of the opponent.

    Confirmation applies the rating delta to both players, bumps their
    win/loss counters and stamps the match in a single transaction. A match
    that is no longer pending raises ``InvalidState``, so a result can never
    be applied twice.
    """

    match = await repository.get_match(session, match_id, for_update=True)
    if match.status != MatchStatus.PENDING.value:
        raise InvalidState(match.id, match.status)
    _check_responder(match, responder_id)

    now = utc_now()
    match.responded_by_id = responder_id
    match.responded_at = now

    if decision == Decision.REJECT:
        match.status = MatchStatus.REJECTED.value
        await _commit(session, match.id)
        logger.info("Match %s rejected by %s", match.id, responder_id)
        return match

    players = await repository.lock_players(session, match.participant_ids)
    winner = players[match.winner_id]
    loser = players[match.loser_id]
    winner_change, loser_change = rating_delta(winner.rating, loser.rating, k)

    winner.rating += winner_change
    winner.wins += 1
    winner.matches_played += 1
    loser.rating += loser_change
    loser.losses += 1
    loser.matches_played += 1

    if match.winner_id == match.player1_id:
        match.player1_rating_change, match.player2_rating_change = winner_change, loser_change
    else:
        match.player1_rating_change, match.player2_rating_change = loser_change, winner_change
    match.status = MatchStatus.CONFIRMED.value
    match.confirmed_at = now

    await _commit(session, match.id)
    logger.info(
        "Match %s confirmed by %s: %s %+d, %s %+d",
        match.id,
        responder_id,
        winner.id,
        winner_change,
        loser.id,
        loser_change,
    )
    return match
