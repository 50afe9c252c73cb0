from typing import Any, List, Optional, Sequence

from ..config import MAX_SETS_PER_MATCH
from ..exceptions import ValidationError
from ..scoring import tennis
from ..scoring.tennis import MatchWinner, SetScore


def _coerce_games(value: Any, label: str) -> int:
    # Reject booleans explicitly (bool is a subclass of int in Python)
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer (not a boolean).")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")
    if isinstance(value, float) and value != number:
        raise ValidationError(f"{label} must be an integer.")
    if number < 0:
        raise ValidationError(f"{label} must be >= 0.")
    return number


def _coerce_set(raw: Any, index: int) -> SetScore:
    if isinstance(raw, SetScore):
        values = list(raw)
    elif isinstance(raw, dict):
        if "player1" not in raw or "player2" not in raw:
            raise ValidationError(f"Set #{index} must include both player1 and player2.")
        values = [raw["player1"], raw["player2"], raw.get("tiebreak")]
    elif isinstance(raw, (list, tuple)) and len(raw) in (2, 3):
        values = list(raw) + [None] * (3 - len(raw))
    elif hasattr(raw, "player1") and hasattr(raw, "player2"):
        values = [raw.player1, raw.player2, getattr(raw, "tiebreak", None)]
    else:
        raise ValidationError(
            f"Set #{index} must be an object with player1 and player2 or a 2-3 item list."
        )

    p1 = _coerce_games(values[0], f"Set #{index} player1 games")
    p2 = _coerce_games(values[1], f"Set #{index} player2 games")
    tiebreak = values[2]
    if tiebreak is not None:
        tiebreak = _coerce_games(tiebreak, f"Set #{index} tiebreak points")
    return SetScore(p1, p2, tiebreak)


def validate_set_scores(
    sets: Sequence[Any],
    *,
    max_sets: Optional[int] = MAX_SETS_PER_MATCH,
) -> List[SetScore]:
    """Validate and normalize submitted tennis set scores.

    Rules:
    - At least one played set is required (``0-0`` sets are placeholders and
      are dropped)
    - Number of played sets must be <= ``max_sets`` (if provided)
    - Games must be integers >= 0 (booleans are rejected)
    - Every played set must be a legal standard or pro set
    - Tiebreak points may only accompany a 7-6 or 9-8 set

    Returns the played sets in submission order.
    """

    if isinstance(sets, (str, bytes)) or not isinstance(sets, Sequence):
        raise ValidationError("At least one set is required.")

    normalized = [_coerce_set(raw, i) for i, raw in enumerate(sets, start=1)]
    played = tennis.played_sets(normalized)
    if not played:
        raise ValidationError("At least one set is required.")
    if max_sets is not None and len(played) > max_sets:
        raise ValidationError(f"Too many sets. Max allowed is {max_sets}.")

    for i, s in enumerate(normalized, start=1):
        if s.is_placeholder:
            continue
        if not tennis.validate_set(s.player1, s.player2):
            raise ValidationError(
                f"Set #{i} score {s.player1}-{s.player2} is not a valid tennis set."
            )
        if s.tiebreak is not None and not tennis.is_tiebreak(s.player1, s.player2):
            raise ValidationError(
                f"Set #{i} score {s.player1}-{s.player2} was not decided by a tiebreak."
            )

    return played


def decide_match(sets: Sequence[SetScore]) -> MatchWinner:
    """Return the winner of validated sets; a tie in sets is rejected."""
    winner = tennis.match_winner(sets)
    if winner == MatchWinner.NO_WINNER:
        raise ValidationError("Match must have a winner (sets cannot be tied).")
    return winner


def validate_participants(reporter_id: str, opponent_id: str, winner_id: str) -> None:
    if not opponent_id or not reporter_id:
        raise ValidationError("Both participants are required.")
    if reporter_id == opponent_id:
        raise ValidationError("You cannot report a match against yourself.")
    if winner_id not in (reporter_id, opponent_id):
        raise ValidationError("winnerId must be one of the two participants.")
