"""Tennis set-score rules.
Decides whether final set scores are legal, who won, and how the result is
written down."""

import enum
from typing import NamedTuple, Optional, Sequence


class SetScore(NamedTuple):
    """Games won by each side in one set, from player 1's side of the net.

    ``tiebreak`` holds the points won by the loser of the tiebreak, when the
    set went to one and the reporter supplied it.
    """

    player1: int
    player2: int
    tiebreak: Optional[int] = None

    @property
    def is_placeholder(self) -> bool:
        return self.player1 == 0 and self.player2 == 0


class MatchWinner(enum.IntEnum):
    NO_WINNER = 0
    PLAYER1 = 1
    PLAYER2 = 2


# Winning game count -> loser game counts that end the set there.
# 6 and 8 close a set with a two-game lead before 5-5 / 7-7; 7 and 9 are the
# extended (two clear) and tiebreak finishes.
_STANDARD_SET = {6: range(0, 5), 7: (5, 6)}
_PRO_SET = {8: range(0, 7), 9: (7, 8)}
_FINISHES = {**_STANDARD_SET, **_PRO_SET}
_TIEBREAK_SCORES = {(7, 6), (9, 8)}


def validate_set(a: int, b: int) -> bool:
    """Return ``True`` if ``a``-``b`` is a legal final score for one set."""
    if a < 0 or b < 0:
        return False
    high, low = max(a, b), min(a, b)
    allowed = _FINISHES.get(high)
    if allowed is None:
        return False
    return low in allowed


def is_tiebreak(a: int, b: int) -> bool:
    return (max(a, b), min(a, b)) in _TIEBREAK_SCORES


def match_winner(sets: Sequence[SetScore]) -> MatchWinner:
    p1_sets = sum(1 for s in sets if s.player1 > s.player2)
    p2_sets = sum(1 for s in sets if s.player2 > s.player1)
    if p1_sets > p2_sets:
        return MatchWinner.PLAYER1
    if p2_sets > p1_sets:
        return MatchWinner.PLAYER2
    return MatchWinner.NO_WINNER


def format_score(sets: Sequence[SetScore], winner: MatchWinner) -> str:
    """Render the canonical score string, e.g. ``"6-4, 6-7(3), 6-2"``.

    Each set reads from the match winner's side. A tiebreak set carries the
    tiebreak loser's points in parentheses. ``0-0`` sets are unfilled
    placeholders and are left out.
    """
    if winner == MatchWinner.NO_WINNER:
        raise ValueError("cannot format a score without a winner")

    tokens = []
    for s in sets:
        if s.is_placeholder:
            continue
        if winner == MatchWinner.PLAYER1:
            token = f"{s.player1}-{s.player2}"
        else:
            token = f"{s.player2}-{s.player1}"
        if s.tiebreak is not None and is_tiebreak(s.player1, s.player2):
            token += f"({s.tiebreak})"
        tokens.append(token)
    return ", ".join(tokens)


def played_sets(sets: Sequence[SetScore]) -> list[SetScore]:
    return [s for s in sets if not s.is_placeholder]
