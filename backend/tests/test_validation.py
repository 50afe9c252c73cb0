import pytest
from rallyrank.exceptions import ValidationError
from rallyrank.scoring.tennis import MatchWinner, SetScore
from rallyrank.services.validation import (
    decide_match,
    validate_participants,
    validate_set_scores,
)


def test_accepts_valid_sets() -> None:
    assert validate_set_scores([{"player1": 6, "player2": 4}]) == [SetScore(6, 4)]
    assert validate_set_scores([[6, 4], [4, 6], [7, 6, 5]]) == [
        SetScore(6, 4),
        SetScore(4, 6),
        SetScore(7, 6, 5),
    ]


def test_drops_placeholder_sets() -> None:
    played = validate_set_scores([[6, 4], [0, 0], [7, 5], [0, 0]])
    assert played == [SetScore(6, 4), SetScore(7, 5)]


def test_accepts_objects_with_attributes() -> None:
    class Submitted:
        player1 = 9
        player2 = 8
        tiebreak = 6

    assert validate_set_scores([Submitted()]) == [SetScore(9, 8, 6)]


@pytest.mark.parametrize(
    "sets, msg",
    [
        ([], "At least one set"),                                  # empty list
        ([[0, 0], [0, 0]], "At least one set"),                    # only placeholders
        ([{"player1": 6, "player2": 5}], "not a valid tennis set"),
        ([{"player1": 10, "player2": 8}], "not a valid tennis set"),
        ([{"player1": -1, "player2": 6}], ">= 0"),                 # negative
        ([{"player1": "x", "player2": 0}], "integer"),             # non-integer
        ([{"player1": True, "player2": 6}], "not a boolean"),
        ([{"player1": 6}], "include both player1 and player2"),    # missing key
        ("not a list", "At least one set"),                        # wrong top-level type
        ([42], "must be an object"),                               # non-set entry
        ([[6, 4, 3]], "not decided by a tiebreak"),
        ([[7, 6, -2]], ">= 0"),
    ],
    ids=[
        "empty",
        "placeholders-only",
        "six-five",
        "ten-eight",
        "negative",
        "non-integer",
        "boolean",
        "missing-key",
        "not-a-list",
        "non-set-entry",
        "tiebreak-on-regular-set",
        "negative-tiebreak",
    ],
)
def test_rejects_invalid_sets(sets, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_set_scores(sets)  # type: ignore[arg-type]
    assert msg.lower() in str(exc.value).lower()
    assert exc.value.status_code == 422


def test_rejects_too_many_sets() -> None:
    with pytest.raises(ValidationError):
        validate_set_scores([[6, 0]] * 6, max_sets=5)
    assert len(validate_set_scores([[6, 0]] * 6, max_sets=None)) == 6


def test_decide_match_rejects_ties() -> None:
    assert decide_match([SetScore(4, 6)]) == MatchWinner.PLAYER2
    with pytest.raises(ValidationError) as exc:
        decide_match([SetScore(6, 4), SetScore(4, 6)])
    assert "cannot be tied" in str(exc.value)


@pytest.mark.parametrize(
    "reporter, opponent, winner, msg",
    [
        ("p1", "p1", "p1", "against yourself"),
        ("p1", "p2", "p3", "one of the two participants"),
        ("p1", "", "p1", "Both participants"),
    ],
)
def test_validate_participants(reporter, opponent, winner, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_participants(reporter, opponent, winner)
    assert msg in str(exc.value)
