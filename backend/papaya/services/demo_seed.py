"""
Demo data seeding

Replaces the tournament catalogue with one published sample tournament per
format and provisions a superadmin account. Used by ``seed_demo_data.py``;
never exposed over HTTP.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from papaya.errors import StoreFailure
from papaya.models.match import Match
from papaya.models.participant import Participant
from papaya.models.tournament import Tournament, TournamentFormat, TournamentStatus
from papaya.models.user import User, UserRole
from papaya.services.identity import get_user_by_email, register_user

logger = logging.getLogger(__name__)

# (name, format, capacity)
SAMPLE_TOURNAMENTS = [
    ("Papaya - Grupos", TournamentFormat.groups_knockout, 16),
    ("Papaya - Knockout", TournamentFormat.knockout, 8),
    ("Papaya - Americano", TournamentFormat.americano, 12),
]


def seed_demo_tournaments(session: Session, start_date: Optional[date] = None) -> List[Tournament]:
    """Delete all tournaments (with their participants and matches) and insert the samples."""
    start_date = start_date or date.today()
    try:
        # Children before parents
        for model in (Match, Participant, Tournament):
            for row in session.exec(select(model)).all():
                session.delete(row)
            session.flush()

        tournaments = [
            Tournament(
                name=name,
                format=fmt,
                start_date=start_date,
                capacity=capacity,
                status=TournamentStatus.published,
            )
            for name, fmt, capacity in SAMPLE_TOURNAMENTS
        ]
        session.add_all(tournaments)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to seed demo tournaments")
        raise StoreFailure("Failed to seed demo tournaments") from e

    for tournament in tournaments:
        session.refresh(tournament)
    logger.info("Seeded %d demo tournaments", len(tournaments))
    return tournaments


def ensure_superadmin(session: Session, email: str, password: str, name: str = "Superadmin") -> User:
    """Return the superadmin with this email, creating it if needed."""
    user = get_user_by_email(session, email)
    if user:
        if user.role != UserRole.superadmin:
            logger.warning("User %s exists with role %s, not promoting", email, user.role)
        return user
    return register_user(
        session,
        name=name,
        email=email,
        password=password,
        role=UserRole.superadmin,
        allow_privileged=True,
    )
