import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import DEFAULT_RATING
from ..models import Player

logger = logging.getLogger(__name__)


async def ensure_player(
    session: AsyncSession, player_id: str, name: str, photo_url: str | None = None
) -> Player:
    """Return the player for ``player_id``, creating it on first sign-in.

    New players start at the default rating with no recorded matches.
    """

    player = await session.get(Player, player_id)
    if player is not None:
        return player

    player = Player(
        id=player_id,
        name=name.strip() or player_id,
        photo_url=photo_url,
        rating=DEFAULT_RATING,
        wins=0,
        losses=0,
        matches_played=0,
    )
    session.add(player)
    try:
        await session.commit()
    except IntegrityError:
        # Another request created the same player first.
        await session.rollback()
        existing = await session.get(Player, player_id)
        if existing is None:
            raise
        return existing
    logger.info("Created player %s on first sign-in", player_id)
    return player
