from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from papaya.database import get_session
from papaya.routes.auth import get_current_caller
from papaya.services import participant_registry
from papaya.utils.guards import Caller

router = APIRouter()


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tournament_id: int
    user_id: int
    created_at: datetime


@router.post("/tournaments/{tournament_id}/participants", response_model=ParticipantResponse, status_code=201)
def register_participant(
    tournament_id: int,
    caller: Caller = Depends(get_current_caller),
    session: Session = Depends(get_session),
):
    """Register the caller as a player (americano tournaments only)"""
    return participant_registry.register_participant(session, caller, tournament_id)


@router.get("/tournaments/{tournament_id}/participants", response_model=List[ParticipantResponse])
def list_participants(tournament_id: int, session: Session = Depends(get_session)):
    return participant_registry.list_participants(session, tournament_id)
