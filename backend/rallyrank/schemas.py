from typing import Any, Dict, List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, Field, StrictInt, model_validator, field_validator, ConfigDict

from .time_utils import coerce_utc, require_utc


class SetScore(BaseModel):
    # Strict so JSON booleans are not read as 0 or 1 games.
    player1: StrictInt
    player2: StrictInt
    tiebreak: Optional[StrictInt] = None

    @model_validator(mode="before")
    def _coerce(cls, value: Any) -> Dict[str, Any]:
        """Allow incoming set scores to be provided as lists or objects."""
        if isinstance(value, dict):
            return value
        if isinstance(value, (list, tuple)) and len(value) in (2, 3):
            tiebreak = value[2] if len(value) == 3 else None
            return {"player1": value[0], "player2": value[1], "tiebreak": tiebreak}
        if hasattr(value, "player1") or hasattr(value, "player2"):
            return {
                "player1": getattr(value, "player1", None),
                "player2": getattr(value, "player2", None),
                "tiebreak": getattr(value, "tiebreak", None),
            }
        raise TypeError("Set scores must be a mapping or 2-3 item tuple/list.")


class SetsIn(BaseModel):
    sets: List[SetScore]


class MatchCreate(BaseModel):
    """Result reported by the signed-in player.

    Set scores are given from the reporter's side of the net: ``player1`` is
    the reporter and ``player2`` the opponent.
    """

    opponentId: str = Field(..., min_length=1)
    winnerId: str = Field(..., min_length=1)
    sets: List[SetScore]
    playedAt: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("playedAt")
    @classmethod
    def _require_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return require_utc(value, field_name="playedAt")


class MatchRespond(BaseModel):
    status: Literal["confirmed", "rejected"]

    model_config = ConfigDict(extra="forbid")


class MatchOut(BaseModel):
    id: str
    player1Id: str
    player2Id: str
    winnerId: str
    score: str
    status: Literal["pending", "confirmed", "rejected"]
    reportedById: str
    respondedById: Optional[str] = None
    player1RatingChange: Optional[int] = None
    player2RatingChange: Optional[int] = None
    playedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    respondedAt: Optional[datetime] = None
    confirmedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, match: Any) -> "MatchOut":
        return cls(
            id=match.id,
            player1Id=match.player1_id,
            player2Id=match.player2_id,
            winnerId=match.winner_id,
            score=match.score,
            status=match.status,
            reportedById=match.reported_by_id,
            respondedById=match.responded_by_id,
            player1RatingChange=match.player1_rating_change,
            player2RatingChange=match.player2_rating_change,
            playedAt=coerce_utc(match.played_at),
            createdAt=coerce_utc(match.created_at),
            respondedAt=coerce_utc(match.responded_at),
            confirmedAt=coerce_utc(match.confirmed_at),
        )


class PlayerOut(BaseModel):
    id: str
    name: str
    photoUrl: Optional[str] = None
    rating: int
    wins: int
    losses: int
    matchesPlayed: int

    @classmethod
    def from_model(cls, player: Any) -> "PlayerOut":
        return cls(
            id=player.id,
            name=player.name,
            photoUrl=player.photo_url,
            rating=player.rating,
            wins=player.wins,
            losses=player.losses,
            matchesPlayed=player.matches_played,
        )


class LeaderboardEntryOut(PlayerOut):
    rank: int


class LeaderboardOut(BaseModel):
    leaders: List[LeaderboardEntryOut] = Field(default_factory=list)
    total: int
    limit: int
    offset: int


class SetCheckOut(BaseModel):
    player1: int
    player2: int
    tiebreak: Optional[int] = None
    valid: bool
    isTiebreak: bool


class SetsValidationOut(BaseModel):
    """Preview of a submission: per-set legality plus the derived result."""

    sets: List[SetCheckOut] = Field(default_factory=list)
    valid: bool
    winner: Optional[Literal["player1", "player2"]] = None
    score: Optional[str] = None
    error: Optional[str] = None


class RatingDeltaOut(BaseModel):
    winnerRating: int
    loserRating: int
    expectedWinner: float
    winnerChange: int
    loserChange: int
