import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.sql import func

from .config import DEFAULT_RATING
from .db import Base


class MatchStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class Player(Base):
    __tablename__ = "player"
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    photo_url = Column(String, nullable=True)
    # Derived aggregates over confirmed matches; only the match lifecycle
    # service writes these.
    rating = Column(Integer, nullable=False, default=DEFAULT_RATING)
    wins = Column(Integer, nullable=False, default=0)
    losses = Column(Integer, nullable=False, default=0)
    matches_played = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    version_id = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    __table_args__ = (
        CheckConstraint(
            "matches_played = wins + losses", name="matches_played_total"
        ),
        Index("ix_player_rating", "rating"),
    )


class Match(Base):
    __tablename__ = "match"
    id = Column(String, primary_key=True)
    # player1 is always the reporting participant; set scores are submitted
    # from their side.
    player1_id = Column(String, ForeignKey("player.id"), nullable=False)
    player2_id = Column(String, ForeignKey("player.id"), nullable=False)
    winner_id = Column(String, ForeignKey("player.id"), nullable=False)
    reported_by_id = Column(String, ForeignKey("player.id"), nullable=False)
    responded_by_id = Column(String, ForeignKey("player.id"), nullable=True)
    score = Column(String, nullable=False)
    status = Column(String, nullable=False, default=MatchStatus.PENDING.value)
    player1_rating_change = Column(Integer, nullable=True)
    player2_rating_change = Column(Integer, nullable=True)
    played_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    version_id = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    __table_args__ = (
        CheckConstraint("player1_id <> player2_id", name="distinct_players"),
        CheckConstraint(
            "winner_id = player1_id OR winner_id = player2_id",
            name="winner_is_participant",
        ),
        CheckConstraint(
            "reported_by_id = player1_id OR reported_by_id = player2_id",
            name="reporter_is_participant",
        ),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'rejected')", name="status_valid"
        ),
        Index("ix_match_status", "status"),
        Index("ix_match_player1_id", "player1_id"),
        Index("ix_match_player2_id", "player2_id"),
    )

    @property
    def participant_ids(self) -> tuple[str, str]:
        return self.player1_id, self.player2_id

    @property
    def loser_id(self) -> str:
        return self.player2_id if self.winner_id == self.player1_id else self.player1_id
