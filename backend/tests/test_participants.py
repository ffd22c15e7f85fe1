"""
Tests for participant registration.
"""
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from papaya.errors import AlreadyRegistered, NotFound, UnsupportedFormat
from papaya.models.participant import Participant
from papaya.models.tournament import TournamentFormat
from papaya.services import participant_registry
from tests.conftest import auth_headers, caller_for


def _participant_count(session: Session, tournament_id: int) -> int:
    return len(session.exec(select(Participant).where(Participant.tournament_id == tournament_id)).all())


def test_jugador_registers(client: TestClient, session: Session, jugador, make_tournament):
    tournament = make_tournament()

    response = client.post(f"/api/tournaments/{tournament.id}/participants", headers=auth_headers(jugador))

    assert response.status_code == 201
    data = response.json()
    assert data["tournament_id"] == tournament.id
    assert data["user_id"] == jugador.id
    assert _participant_count(session, tournament.id) == 1


def test_second_registration_rejected(client: TestClient, session: Session, jugador, make_tournament):
    tournament = make_tournament()
    url = f"/api/tournaments/{tournament.id}/participants"

    first = client.post(url, headers=auth_headers(jugador))
    second = client.post(url, headers=auth_headers(jugador))

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["code"] == "already_registered"
    assert _participant_count(session, tournament.id) == 1


def test_unique_constraint_backs_up_lookup(session: Session, jugador, make_tournament, monkeypatch):
    """A registration the lookup misses still fails on the unique constraint"""
    tournament = make_tournament()
    caller = caller_for(jugador)
    participant_registry.register_participant(session, caller, tournament.id)

    monkeypatch.setattr(participant_registry, "find_registration", lambda *args: None)

    with pytest.raises(AlreadyRegistered):
        participant_registry.register_participant(session, caller, tournament.id)
    assert _participant_count(session, tournament.id) == 1


@pytest.mark.parametrize("fmt", [TournamentFormat.knockout, TournamentFormat.groups_knockout])
def test_non_americano_rejected(session: Session, jugador, make_tournament, fmt):
    tournament = make_tournament(format=fmt)

    with pytest.raises(UnsupportedFormat):
        participant_registry.register_participant(session, caller_for(jugador), tournament.id)
    assert _participant_count(session, tournament.id) == 0


def test_non_americano_maps_to_400(client: TestClient, jugador, make_tournament):
    tournament = make_tournament(format=TournamentFormat.knockout)

    response = client.post(f"/api/tournaments/{tournament.id}/participants", headers=auth_headers(jugador))

    assert response.status_code == 400
    assert response.json()["code"] == "unsupported_format"


def test_missing_tournament(session: Session, jugador):
    with pytest.raises(NotFound):
        participant_registry.register_participant(session, caller_for(jugador), 404)


def test_club_and_superadmin_may_register(session: Session, club, superadmin, make_tournament):
    tournament = make_tournament()

    participant_registry.register_participant(session, caller_for(club), tournament.id)
    participant_registry.register_participant(session, caller_for(superadmin), tournament.id)

    assert _participant_count(session, tournament.id) == 2


def test_registration_requires_token(client: TestClient, make_tournament):
    tournament = make_tournament()

    response = client.post(f"/api/tournaments/{tournament.id}/participants")

    assert response.status_code == 401


def test_list_participants_in_registration_order(client: TestClient, session: Session, make_user, make_tournament):
    tournament = make_tournament()
    players = [make_user() for _ in range(3)]
    for player in reversed(players):
        participant_registry.register_participant(session, caller_for(player), tournament.id)

    response = client.get(f"/api/tournaments/{tournament.id}/participants")

    assert response.status_code == 200
    assert [p["user_id"] for p in response.json()] == [p.id for p in reversed(players)]


def test_list_participants_missing_tournament(client: TestClient):
    response = client.get("/api/tournaments/77/participants")

    assert response.status_code == 404
