"""Internal application services."""

from .validation import validate_set_scores, decide_match
from .rating import expected_score, rating_delta
from .matches import Decision, propose_match, respond_to_match
from .players import ensure_player

__all__ = [
    "validate_set_scores",
    "decide_match",
    "expected_score",
    "rating_delta",
    "Decision",
    "propose_match",
    "respond_to_match",
    "ensure_player",
]
