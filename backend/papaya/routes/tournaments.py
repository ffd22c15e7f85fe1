from datetime import date, datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from papaya.database import get_session
from papaya.models.tournament import TournamentFormat, TournamentStatus
from papaya.routes.auth import get_current_caller
from papaya.services import tournament_lifecycle
from papaya.utils.guards import Caller

router = APIRouter()


class TournamentCreate(BaseModel):
    # Unknown keys (status, club_id, ...) are dropped
    model_config = ConfigDict(extra="ignore")

    name: str
    format: TournamentFormat
    start_date: date
    end_date: Optional[date] = None
    capacity: Optional[int] = None
    settings: Optional[Dict[str, Any]] = None


class TournamentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    club_id: Optional[int]
    format: TournamentFormat
    start_date: date
    end_date: Optional[date] = None
    capacity: Optional[int] = None
    status: TournamentStatus
    settings: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


@router.post("/tournaments", response_model=TournamentResponse, status_code=201)
def create_tournament(
    request: TournamentCreate,
    caller: Caller = Depends(get_current_caller),
    session: Session = Depends(get_session),
):
    """Create a tournament owned by the caller; it starts pending approval"""
    return tournament_lifecycle.create_tournament(session, caller, request.model_dump())


@router.post("/tournaments/{tournament_id}/approve", response_model=TournamentResponse)
def approve_tournament(
    tournament_id: int,
    caller: Caller = Depends(get_current_caller),
    session: Session = Depends(get_session),
):
    return tournament_lifecycle.approve_tournament(session, caller, tournament_id)


@router.get("/tournaments", response_model=List[TournamentResponse])
def list_tournaments(session: Session = Depends(get_session)):
    """Published tournaments only, earliest first"""
    return tournament_lifecycle.list_published_tournaments(session)


@router.get("/tournaments/{tournament_id}", response_model=TournamentResponse)
def get_tournament(tournament_id: int, session: Session = Depends(get_session)):
    return tournament_lifecycle.get_tournament(session, tournament_id)
