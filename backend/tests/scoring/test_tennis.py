import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from rallyrank.scoring import tennis
from rallyrank.scoring.tennis import MatchWinner, SetScore

# Every legal final set score, written winner first.
LEGAL_SETS = (
    {(6, low) for low in range(0, 5)}
    | {(7, 5), (7, 6)}
    | {(8, low) for low in range(0, 7)}
    | {(9, 7), (9, 8)}
)


@pytest.mark.parametrize("a, b", sorted(LEGAL_SETS))
def test_validate_set_accepts_legal_scores_either_way_round(a, b):
    assert tennis.validate_set(a, b) is True
    assert tennis.validate_set(b, a) is True


@pytest.mark.parametrize(
    "a, b",
    [
        (6, 5),   # no two-game lead
        (5, 4),   # not enough games
        (7, 4),   # 7 only after 5-5
        (7, 7),
        (6, 6),   # no winner
        (8, 7),   # pro set without two-game lead
        (8, 8),
        (9, 6),
        (10, 8),  # too many games
        (12, 10),
        (0, 0),
        (-1, 6),
        (6, -1),
    ],
)
def test_validate_set_rejects_illegal_scores(a, b):
    assert tennis.validate_set(a, b) is False


def test_validate_set_matches_enumerated_patterns_and_is_symmetric():
    for a in range(0, 13):
        for b in range(0, 13):
            expected = (max(a, b), min(a, b)) in LEGAL_SETS
            assert tennis.validate_set(a, b) is expected, (a, b)
            assert tennis.validate_set(a, b) == tennis.validate_set(b, a)


def test_is_tiebreak():
    assert tennis.is_tiebreak(7, 6)
    assert tennis.is_tiebreak(6, 7)
    assert tennis.is_tiebreak(9, 8)
    assert tennis.is_tiebreak(8, 9)
    for a, b in [(6, 4), (7, 5), (8, 6), (9, 7), (6, 6)]:
        assert not tennis.is_tiebreak(a, b)


def test_match_winner_counts_sets():
    assert tennis.match_winner([SetScore(6, 4)]) == MatchWinner.PLAYER1
    assert tennis.match_winner([SetScore(4, 6), SetScore(3, 6)]) == MatchWinner.PLAYER2
    assert (
        tennis.match_winner([SetScore(6, 3), SetScore(4, 6), SetScore(6, 2)])
        == MatchWinner.PLAYER1
    )


def test_match_winner_without_a_winner():
    assert tennis.match_winner([SetScore(6, 4), SetScore(4, 6)]) == MatchWinner.NO_WINNER
    assert tennis.match_winner([]) == MatchWinner.NO_WINNER
    assert tennis.match_winner([SetScore(0, 0), SetScore(3, 3)]) == MatchWinner.NO_WINNER


def test_format_score_from_winner_perspective():
    sets = [SetScore(6, 4), SetScore(7, 5)]
    assert tennis.format_score(sets, MatchWinner.PLAYER1) == "6-4, 7-5"

    sets = [SetScore(4, 6), SetScore(5, 7)]
    assert tennis.format_score(sets, MatchWinner.PLAYER2) == "6-4, 7-5"


def test_format_score_skips_placeholder_sets():
    sets = [SetScore(6, 4), SetScore(7, 5), SetScore(0, 0)]
    assert tennis.format_score(sets, MatchWinner.PLAYER1) == "6-4, 7-5"


def test_format_score_tiebreaks():
    assert tennis.format_score([SetScore(7, 6, 4)], MatchWinner.PLAYER1) == "7-6(4)"
    assert tennis.format_score([SetScore(6, 7, 5)], MatchWinner.PLAYER2) == "7-6(5)"
    assert tennis.format_score([SetScore(9, 8, 6)], MatchWinner.PLAYER1) == "9-8(6)"
    sets = [SetScore(6, 4), SetScore(6, 7, 3), SetScore(6, 2)]
    assert tennis.format_score(sets, MatchWinner.PLAYER1) == "6-4, 6-7(3), 6-2"


def test_format_score_tiebreak_without_points():
    assert tennis.format_score([SetScore(7, 6)], MatchWinner.PLAYER1) == "7-6"


def test_format_score_requires_a_winner():
    with pytest.raises(ValueError):
        tennis.format_score([SetScore(6, 4)], MatchWinner.NO_WINNER)
