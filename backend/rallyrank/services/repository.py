"""Data access for players and matches.

Every function works inside the caller's session and transaction; nothing
here commits.
"""

from typing import Iterable, Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import MatchNotFound, PlayerNotFound
from ..models import Match, MatchStatus, Player


async def get_player(session: AsyncSession, player_id: str) -> Player:
    player = await session.get(Player, player_id)
    if player is None:
        raise PlayerNotFound(player_id)
    return player


async def lock_players(
    session: AsyncSession, player_ids: Iterable[str]
) -> dict[str, Player]:
    """Load and row-lock players for a read-modify-write.

    Rows are locked in id order so two confirmations sharing a player always
    acquire locks in the same sequence. ``populate_existing`` replaces any
    stale copies already sitting in the session's identity map.
    """

    ids = sorted(set(player_ids))
    rows = (
        await session.execute(
            select(Player)
            .where(Player.id.in_(ids))
            .order_by(Player.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
    ).scalars().all()
    players = {p.id: p for p in rows}
    for pid in ids:
        if pid not in players:
            raise PlayerNotFound(pid)
    return players


async def create_match(session: AsyncSession, match: Match) -> str:
    session.add(match)
    await session.flush()
    return match.id


async def get_match(
    session: AsyncSession, match_id: str, *, for_update: bool = False
) -> Match:
    stmt = select(Match).where(Match.id == match_id)
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    match = (await session.execute(stmt)).scalar_one_or_none()
    if match is None:
        raise MatchNotFound(match_id)
    return match


async def list_matches(
    session: AsyncSession,
    *,
    status: Optional[MatchStatus] = None,
    player_id: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[Match]:
    stmt = select(Match)
    if status is not None:
        stmt = stmt.where(Match.status == status.value)
    if player_id is not None:
        stmt = stmt.where(
            or_(Match.player1_id == player_id, Match.player2_id == player_id)
        )
    stmt = stmt.order_by(Match.created_at.desc(), Match.id).limit(limit).offset(offset)
    return (await session.execute(stmt)).scalars().all()


async def list_pending_for(session: AsyncSession, player_id: str) -> Sequence[Match]:
    """Pending matches that ``player_id`` is expected to confirm or reject."""
    stmt = (
        select(Match)
        .where(
            Match.status == MatchStatus.PENDING.value,
            or_(Match.player1_id == player_id, Match.player2_id == player_id),
            Match.reported_by_id != player_id,
        )
        .order_by(Match.created_at.desc(), Match.id)
    )
    return (await session.execute(stmt)).scalars().all()


async def list_players(
    session: AsyncSession, *, limit: int = 50, offset: int = 0
) -> Sequence[Player]:
    stmt = select(Player).order_by(func.lower(Player.name), Player.id)
    return (await session.execute(stmt.limit(limit).offset(offset))).scalars().all()


async def top_players(
    session: AsyncSession, *, limit: int = 50, offset: int = 0
) -> tuple[int, Sequence[Player]]:
    total = (await session.execute(select(func.count(Player.id)))).scalar_one()
    stmt = (
        select(Player)
        .order_by(Player.rating.desc(), Player.wins.desc(), func.lower(Player.name), Player.id)
        .limit(limit)
        .offset(offset)
    )
    return total, (await session.execute(stmt)).scalars().all()
