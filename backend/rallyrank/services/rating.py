import math

from ..config import RATING_K_FACTOR

K_FACTOR = RATING_K_FACTOR
RATING_SCALE = 400.0


def _round_half_up(value: float) -> int:
    # round() rounds half to even; rating changes round .5 upward.
    return int(math.floor(value + 0.5))


def expected_score(rating: float, opponent_rating: float) -> float:
    """Probability that a player rated ``rating`` beats ``opponent_rating``.

    Saturates at 0.0 and 1.0 for rating gaps too wide to represent.
    """
    try:
        return 1 / (1 + 10 ** ((opponent_rating - rating) / RATING_SCALE))
    except OverflowError:
        return 0.0


def rating_delta(
    winner_rating: int, loser_rating: int, k: float = K_FACTOR
) -> tuple[int, int]:
    """Return ``(winner_change, loser_change)`` for one decided match.

    Uses the logistic Elo expectation. The winner gains more for beating a
    higher-rated opponent and less for beating a weaker one; the loser's
    change mirrors it up to one point of rounding slack.

    A confirmed result always moves both ratings: when the rating gap is so
    wide that the rounded change would be zero, the winner still gains one
    point and the loser drops one. Earlier clients reported 0 for both
    players in that case, so deltas differ from theirs once the gap passes
    roughly 720 points.
    """

    surprise = 1 - expected_score(winner_rating, loser_rating)
    winner_change = _round_half_up(k * surprise)
    loser_change = _round_half_up(k * (0 - surprise))
    return max(winner_change, 1), min(loser_change, -1)
