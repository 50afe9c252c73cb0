from fastapi import APIRouter, Query, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..schemas import LeaderboardEntryOut, LeaderboardOut, PlayerOut
from ..services import repository

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])


# GET /api/v0/leaderboards?limit=20
@router.get("", response_model=LeaderboardOut)
async def leaderboard(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    total, rows = await repository.top_players(session, limit=limit, offset=offset)
    leaders = [
        LeaderboardEntryOut(
            **PlayerOut.from_model(player).model_dump(),
            rank=offset + i + 1,
        )
        for i, player in enumerate(rows)
    ]
    return LeaderboardOut(leaders=leaders, total=total, limit=limit, offset=offset)
