"""
Participant Registry

One registration per user per tournament, americano tournaments only. The
lookup before insert is advisory; the (tournament_id, user_id) unique
constraint is what actually prevents duplicates.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from papaya.errors import AlreadyRegistered, StoreFailure, UnsupportedFormat
from papaya.models.participant import Participant
from papaya.models.tournament import TournamentFormat
from papaya.utils.guards import Caller, Permission, get_tournament_or_raise, require_permission

logger = logging.getLogger(__name__)


def find_registration(session: Session, tournament_id: int, user_id: int) -> Optional[Participant]:
    return session.exec(
        select(Participant).where(Participant.tournament_id == tournament_id, Participant.user_id == user_id)
    ).first()


def register_participant(session: Session, caller: Caller, tournament_id: int) -> Participant:
    """
    Register the caller as a player in an americano tournament.

    Raises:
        NotFound: tournament does not exist
        UnsupportedFormat: tournament is not americano
        AlreadyRegistered: caller is already registered
        StoreFailure: database error
    """
    require_permission(caller, Permission.register_as_player)
    tournament = get_tournament_or_raise(session, tournament_id)

    if tournament.format != TournamentFormat.americano:
        fmt = TournamentFormat(tournament.format).value
        raise UnsupportedFormat(f"Tournament {tournament_id} is '{fmt}', not americano")

    if find_registration(session, tournament_id, caller.user_id):
        raise AlreadyRegistered(f"User {caller.user_id} already registered for tournament {tournament_id}")

    participant = Participant(tournament_id=tournament_id, user_id=caller.user_id)
    try:
        session.add(participant)
        session.commit()
        session.refresh(participant)
    except IntegrityError as e:
        # A concurrent registration inserted the same pair first
        session.rollback()
        raise AlreadyRegistered(
            f"User {caller.user_id} already registered for tournament {tournament_id}"
        ) from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to register user %d for tournament %d", caller.user_id, tournament_id)
        raise StoreFailure("Failed to register participant") from e

    logger.info("User %d registered for tournament %d", caller.user_id, tournament_id)
    return participant


def list_participants(session: Session, tournament_id: int) -> List[Participant]:
    """Participants of a tournament in registration order"""
    get_tournament_or_raise(session, tournament_id)
    return list(
        session.exec(
            select(Participant).where(Participant.tournament_id == tournament_id).order_by(Participant.id)
        ).all()
    )
