from datetime import date

import pytest
from sqlmodel import Session

from papaya.models.match import Match
from papaya.models.participant import Participant
from papaya.models.tournament import Tournament, TournamentFormat, TournamentStatus
from papaya.models.user import User
from papaya.services import tournament_lifecycle
from tests.conftest import caller_for


@pytest.mark.parametrize(
    "model,column",
    [
        (User, "created_at"),
        (Tournament, "created_at"),
        (Tournament, "updated_at"),
        (Participant, "created_at"),
        (Match, "created_at"),
    ],
)
def test_timestamp_columns_are_timezone_aware(model, column):
    assert model.__table__.c[column].type.timezone is True


def test_timestamp_defaults_carry_utc_offset():
    tournament = Tournament(name="T", format=TournamentFormat.americano, start_date=date(2026, 11, 1))

    assert tournament.created_at.utcoffset().total_seconds() == 0
    assert tournament.updated_at.utcoffset().total_seconds() == 0


def test_approval_sets_aware_updated_at(session: Session, superadmin, make_tournament):
    tournament = make_tournament(status=TournamentStatus.pending_approval)

    approved = tournament_lifecycle.approve_tournament(session, caller_for(superadmin), tournament.id)

    assert approved.status == TournamentStatus.published
    assert approved.updated_at is not None
