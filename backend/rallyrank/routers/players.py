from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..exceptions import ProblemDetail
from ..models import MatchStatus
from ..schemas import MatchOut, PlayerOut
from ..services import repository

router = APIRouter(
    prefix="/players",
    tags=["players"],
    responses={404: {"model": ProblemDetail}},
)


@router.get("", response_model=list[PlayerOut])
async def list_players(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    rows = await repository.list_players(session, limit=limit, offset=offset)
    return [PlayerOut.from_model(p) for p in rows]


@router.get("/{player_id}", response_model=PlayerOut)
async def get_player(player_id: str, session: AsyncSession = Depends(get_session)):
    player = await repository.get_player(session, player_id)
    return PlayerOut.from_model(player)


@router.get("/{player_id}/matches", response_model=list[MatchOut])
async def player_matches(
    player_id: str,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    """Confirmed match history of one player, newest first."""
    await repository.get_player(session, player_id)
    rows = await repository.list_matches(
        session,
        status=MatchStatus.CONFIRMED,
        player_id=player_id,
        limit=limit,
        offset=offset,
    )
    return [MatchOut.from_model(m) for m in rows]
