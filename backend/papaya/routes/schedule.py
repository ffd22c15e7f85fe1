from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from papaya.database import get_session
from papaya.models.match import MatchStatus
from papaya.routes.auth import get_current_caller
from papaya.services import match_persister
from papaya.utils.guards import Caller

router = APIRouter()


class GenerateScheduleResponse(BaseModel):
    tournament_id: int
    rounds: int
    matches: int


class MatchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tournament_id: int
    round: int
    sequence_in_round: int
    team_a: List[int]
    team_b: List[int]
    status: MatchStatus


@router.post("/tournaments/{tournament_id}/generate-americano", response_model=GenerateScheduleResponse)
def generate_americano(
    tournament_id: int,
    caller: Caller = Depends(get_current_caller),
    session: Session = Depends(get_session),
):
    """
    Regenerate the americano schedule from the current participants.

    Replaces any previously generated matches for this tournament.
    """
    summary = match_persister.generate_and_persist(session, caller, tournament_id)
    return GenerateScheduleResponse(
        tournament_id=summary.tournament_id,
        rounds=summary.round_count,
        matches=summary.match_count,
    )


@router.get("/tournaments/{tournament_id}/matches", response_model=List[MatchResponse])
def list_matches(tournament_id: int, session: Session = Depends(get_session)):
    return match_persister.list_matches(session, tournament_id)
