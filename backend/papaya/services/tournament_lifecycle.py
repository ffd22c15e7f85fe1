"""
Tournament Lifecycle

State machine: pending_approval -> published (superadmin approval only).
Clubs and superadmins create tournaments; everyone may list published ones.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, PositiveInt, model_validator
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from papaya.errors import StoreFailure, ValidationError
from papaya.models.tournament import Tournament, TournamentFormat, TournamentStatus
from papaya.utils.guards import Caller, Permission, get_tournament_or_raise, require_permission
from papaya.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class TournamentDraft(BaseModel):
    """Fields a creator may set. status and club_id are not among them."""

    name: str
    format: TournamentFormat
    start_date: date
    end_date: Optional[date] = None
    capacity: Optional[PositiveInt] = None
    settings: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def validate_draft(self):
        if not self.name.strip():
            raise ValueError("name is required")
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self


def _format_validation_error(error: PydanticValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "tournament"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def create_tournament(session: Session, caller: Caller, data: Mapping[str, Any]) -> Tournament:
    """
    Create a tournament owned by the caller, pending approval.

    Any client-supplied status or club_id in data is ignored.

    Raises:
        Forbidden: caller is not a club or superadmin
        ValidationError: required fields missing or malformed
        StoreFailure: database error
    """
    require_permission(caller, Permission.create_tournament)

    try:
        draft = TournamentDraft.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(_format_validation_error(e)) from e

    tournament = Tournament(
        **draft.model_dump(),
        club_id=caller.user_id,
        status=TournamentStatus.pending_approval,
    )
    try:
        session.add(tournament)
        session.commit()
        session.refresh(tournament)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to create tournament for user %d", caller.user_id)
        raise StoreFailure("Failed to create tournament") from e

    logger.info("Tournament %d '%s' created by user %d", tournament.id, tournament.name, caller.user_id)
    return tournament


def approve_tournament(session: Session, caller: Caller, tournament_id: int) -> Tournament:
    """
    Publish a pending tournament. Approving a published tournament is a no-op.

    Raises:
        Forbidden: caller is not a superadmin
        NotFound: tournament does not exist
        StoreFailure: database error
    """
    require_permission(caller, Permission.approve_tournament)
    tournament = get_tournament_or_raise(session, tournament_id)

    if tournament.status == TournamentStatus.published:
        logger.info("Tournament %d already published", tournament_id)
        return tournament

    tournament.status = TournamentStatus.published
    tournament.updated_at = utc_now()
    try:
        session.add(tournament)
        session.commit()
        session.refresh(tournament)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to approve tournament %d", tournament_id)
        raise StoreFailure("Failed to approve tournament") from e

    logger.info("Tournament %d published by user %d", tournament_id, caller.user_id)
    return tournament


def list_published_tournaments(session: Session) -> List[Tournament]:
    """Published tournaments, earliest start_date first"""
    return list(
        session.exec(
            select(Tournament)
            .where(Tournament.status == TournamentStatus.published)
            .order_by(Tournament.start_date, Tournament.id)
        ).all()
    )


def get_tournament(session: Session, tournament_id: int) -> Tournament:
    return get_tournament_or_raise(session, tournament_id)
