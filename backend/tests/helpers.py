"""Shared helpers for seeding players and signing test tokens."""

import asyncio
import time

import jwt

from rallyrank.models import Player

# Matches the secret conftest installs for every test.
TEST_JWT_SECRET = "x" * 32


def seed_players(session_maker, *players):
    """Insert ``(id, name, rating)`` tuples as fresh players."""

    async def _seed():
        async with session_maker() as session:
            session.add_all(
                [
                    Player(
                        id=pid,
                        name=name,
                        rating=rating,
                        wins=0,
                        losses=0,
                        matches_played=0,
                    )
                    for pid, name, rating in players
                ]
            )
            await session.commit()

    asyncio.run(_seed())


def make_token(player_id: str, *, name: str | None = None, expires_in: int = 3600) -> str:
    payload = {"sub": player_id, "exp": int(time.time()) + expires_in}
    if name is not None:
        payload["name"] = name
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def auth_headers(player_id: str, *, name: str | None = None) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(player_id, name=name)}"}
