from datetime import date

from sqlmodel import Session, select

from papaya.models.match import Match
from papaya.models.participant import Participant
from papaya.models.tournament import Tournament, TournamentFormat, TournamentStatus
from papaya.models.user import User, UserRole
from papaya.services.demo_seed import ensure_superadmin, seed_demo_tournaments
from papaya.services.identity import authenticate_credentials


def test_seed_inserts_one_published_tournament_per_format(session: Session):
    tournaments = seed_demo_tournaments(session, start_date=date(2026, 11, 1))

    assert len(tournaments) == 3
    assert {TournamentFormat(t.format) for t in tournaments} == set(TournamentFormat)
    assert all(t.status == TournamentStatus.published for t in tournaments)


def test_seed_replaces_existing_data(session: Session, jugador, make_tournament):
    old = make_tournament(name="Old")
    session.add(Participant(tournament_id=old.id, user_id=jugador.id))
    session.add(Match(tournament_id=old.id, round=1, sequence_in_round=1, team_a=[1, 2], team_b=[3, 4]))
    session.commit()

    seed_demo_tournaments(session)

    names = [t.name for t in session.exec(select(Tournament)).all()]
    assert "Old" not in names
    assert len(names) == 3
    assert session.exec(select(Participant)).all() == []
    assert session.exec(select(Match)).all() == []
    # Users survive reseeding
    assert session.get(User, jugador.id) is not None


def test_ensure_superadmin_is_idempotent(session: Session):
    first = ensure_superadmin(session, "admin@papaya.test", "rootpw")
    second = ensure_superadmin(session, "admin@papaya.test", "other")

    assert first.id == second.id
    assert first.role == UserRole.superadmin
    assert authenticate_credentials(session, "admin@papaya.test", "rootpw").id == first.id
