# backend/rallyrank/routers/matches.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..exceptions import ProblemDetail
from ..models import MatchStatus, Player
from ..schemas import MatchCreate, MatchOut, MatchRespond
from ..services import repository
from ..services.matches import Decision, propose_match, respond_to_match
from .auth import get_current_player, limiter, match_report_rate_limit

# Resource-only prefix; versioning is added in main.py
router = APIRouter(
    prefix="/matches",
    tags=["matches"],
    responses={
        404: {"model": ProblemDetail},
        409: {"model": ProblemDetail},
    },
)

_DECISIONS = {
    "confirmed": Decision.CONFIRM,
    "rejected": Decision.REJECT,
}


@router.get("", response_model=list[MatchOut])
async def list_matches(
    status_filter: Optional[Literal["pending", "confirmed", "rejected"]] = Query(
        None, alias="status"
    ),
    player_id: Optional[str] = Query(None, alias="playerId"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    rows = await repository.list_matches(
        session,
        status=MatchStatus(status_filter) if status_filter else None,
        player_id=player_id,
        limit=limit,
        offset=offset,
    )
    return [MatchOut.from_model(m) for m in rows]


@router.get("/pending", response_model=list[MatchOut])
async def list_pending_matches(
    session: AsyncSession = Depends(get_session),
    player: Player = Depends(get_current_player),
):
    """Matches reported against the signed-in player that still need an answer."""
    rows = await repository.list_pending_for(session, player.id)
    return [MatchOut.from_model(m) for m in rows]


@router.post("", response_model=MatchOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(match_report_rate_limit)
async def create_match(
    request: Request,
    body: MatchCreate,
    session: AsyncSession = Depends(get_session),
    player: Player = Depends(get_current_player),
):
    match = await propose_match(
        session,
        reporter_id=player.id,
        opponent_id=body.opponentId,
        winner_id=body.winnerId,
        sets=body.sets,
        played_at=body.playedAt,
    )
    return MatchOut.from_model(match)


@router.get("/{mid}", response_model=MatchOut)
async def get_match(mid: str, session: AsyncSession = Depends(get_session)):
    match = await repository.get_match(session, mid)
    return MatchOut.from_model(match)


@router.patch("/{mid}", response_model=MatchOut)
async def respond_match(
    mid: str,
    body: MatchRespond,
    session: AsyncSession = Depends(get_session),
    player: Player = Depends(get_current_player),
):
    match = await respond_to_match(session, mid, player.id, _DECISIONS[body.status])
    return MatchOut.from_model(match)
