from fastapi import APIRouter, Query

from ..config import MAX_PREVIEW_RATING
from ..exceptions import ValidationError
from ..schemas import RatingDeltaOut, SetCheckOut, SetsIn, SetsValidationOut
from ..scoring import tennis
from ..scoring.tennis import MatchWinner
from ..services.rating import expected_score, rating_delta
from ..services.validation import decide_match, validate_set_scores

router = APIRouter(prefix="/scoring", tags=["scoring"])

_WINNER_LABELS = {
    MatchWinner.PLAYER1: "player1",
    MatchWinner.PLAYER2: "player2",
}


@router.post("/sets/validate", response_model=SetsValidationOut)
async def validate_sets(body: SetsIn) -> SetsValidationOut:
    """Check a submission without recording it.

    Returns the same score string a reported match would store.
    """
    checks = [
        SetCheckOut(
            player1=s.player1,
            player2=s.player2,
            tiebreak=s.tiebreak,
            valid=(s.player1 == 0 and s.player2 == 0)
            or tennis.validate_set(s.player1, s.player2),
            isTiebreak=tennis.is_tiebreak(s.player1, s.player2),
        )
        for s in body.sets
    ]
    try:
        played = validate_set_scores(body.sets)
        winner = decide_match(played)
    except ValidationError as exc:
        return SetsValidationOut(sets=checks, valid=False, error=exc.detail)

    return SetsValidationOut(
        sets=checks,
        valid=True,
        winner=_WINNER_LABELS[winner],
        score=tennis.format_score(played, winner),
    )


@router.get("/rating-delta", response_model=RatingDeltaOut)
async def get_rating_delta(
    winner_rating: int = Query(..., alias="winnerRating", ge=0, le=MAX_PREVIEW_RATING),
    loser_rating: int = Query(..., alias="loserRating", ge=0, le=MAX_PREVIEW_RATING),
) -> RatingDeltaOut:
    winner_change, loser_change = rating_delta(winner_rating, loser_rating)
    return RatingDeltaOut(
        winnerRating=winner_rating,
        loserRating=loser_rating,
        expectedWinner=expected_score(winner_rating, loser_rating),
        winnerChange=winner_change,
        loserChange=loser_change,
    )
