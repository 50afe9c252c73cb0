import os
from typing import Any

import jwt
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import rate_limits_disabled
from ..db import get_session
from ..exceptions import http_problem
from ..models import Player
from ..schemas import PlayerOut
from ..services.players import ensure_player


def get_jwt_secret() -> str:
  secret = os.getenv("JWT_SECRET")
  if not secret:
    raise RuntimeError("JWT_SECRET environment variable is required")
  if len(secret) < 32 or secret.lower() in {"secret", "changeme", "default"}:
    raise RuntimeError(
        "JWT_SECRET must be at least 32 characters and not a common default"
    )
  return secret


JWT_ALG = "HS256"


def _get_client_ip(request: Request) -> str:
  forwarded = request.headers.get("X-Forwarded-For")
  if forwarded:
    parts = [ip.strip() for ip in forwarded.split(",") if ip.strip()]
    if parts:
      return parts[-1]
  real_ip = request.headers.get("X-Real-IP")
  if real_ip:
    return real_ip
  return request.client.host if request.client else ""


limiter = Limiter(key_func=_get_client_ip)
router = APIRouter(prefix="/auth", tags=["auth"])


def match_report_rate_limit() -> str:
  if rate_limits_disabled():
    return "1000/second"
  return "30/minute"


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
  return JSONResponse(
      status_code=429,
      content={
          "type": "about:blank",
          "title": "Too Many Requests",
          "detail": "rate limit exceeded",
          "status": 429,
          "code": "rate_limited",
      },
      media_type="application/problem+json",
  )


def _extract_bearer_token(authorization: str | None) -> str:
  if not authorization or not authorization.lower().startswith("bearer "):
    raise http_problem(
        status_code=401,
        detail="missing token",
        code="auth_missing_token",
        headers={"WWW-Authenticate": "Bearer"},
    )
  return authorization.split(" ", 1)[1].strip()


def _decode_token(token: str) -> dict[str, Any]:
  try:
    return jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALG])
  except jwt.ExpiredSignatureError:
    raise http_problem(
        status_code=401,
        detail="token expired",
        code="auth_token_expired",
    )
  except jwt.PyJWTError:
    raise http_problem(
        status_code=401,
        detail="invalid token",
        code="auth_invalid_token",
    )


async def get_current_player(
    authorization: str | None = Header(None),
    session: AsyncSession = Depends(get_session),
) -> Player:
  """Resolve the signed-in player from the bearer token.

  Tokens are issued by the identity provider; the ``sub`` claim is the
  player id. A first sign-in carries a ``name`` claim and creates the
  player record.
  """
  payload = _decode_token(_extract_bearer_token(authorization))
  pid = payload.get("sub")
  if not isinstance(pid, str) or not pid:
    raise http_problem(
        status_code=401,
        detail="invalid token",
        code="auth_invalid_token",
    )

  player = await session.get(Player, pid)
  if player is not None:
    return player

  name = payload.get("name")
  if not isinstance(name, str) or not name.strip():
    raise http_problem(
        status_code=401,
        detail="player not found",
        code="auth_player_not_found",
    )
  picture = payload.get("picture")
  return await ensure_player(
      session, pid, name, picture if isinstance(picture, str) else None
  )


@router.get("/me", response_model=PlayerOut)
async def read_me(current: Player = Depends(get_current_player)):
  return PlayerOut.from_model(current)
