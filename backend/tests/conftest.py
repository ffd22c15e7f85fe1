import os

# Keep app startup (init_db) off the on-disk default database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from papaya.database import get_session  # noqa: E402
from papaya.main import app  # noqa: E402
from papaya.models.tournament import Tournament, TournamentFormat, TournamentStatus  # noqa: E402
from papaya.models.user import User, UserRole  # noqa: E402
from papaya.services.identity import issue_token, register_user  # noqa: E402
from papaya.utils.guards import Caller  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

# StaticPool + :memory: so every session (test and request) shares one database.
# Tables are created and dropped around each test.
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on a fresh schema"""
    import papaya.models  # noqa: F401

    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override is set before TestClient() and cleared only after it exits.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {issue_token(user)}"}


def caller_for(user: User) -> Caller:
    return Caller(user_id=user.id, role=UserRole(user.role))


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session):
    """Factory creating users of any role (superadmin included)"""
    counter = {"n": 0}

    def _make(role: UserRole = UserRole.jugador, name: str = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        return register_user(
            session,
            name=name or f"{role.value.title()} {n}",
            email=f"{role.value}{n}@papaya.test",
            password="secret123",
            role=role,
            allow_privileged=True,
        )

    return _make


@pytest.fixture(name="jugador")
def jugador_fixture(make_user) -> User:
    return make_user(UserRole.jugador)


@pytest.fixture(name="club")
def club_fixture(make_user) -> User:
    return make_user(UserRole.club)


@pytest.fixture(name="superadmin")
def superadmin_fixture(make_user) -> User:
    return make_user(UserRole.superadmin)


@pytest.fixture(name="make_tournament")
def make_tournament_fixture(session: Session):
    """Factory inserting tournaments directly, bypassing the approval flow"""
    from datetime import date

    def _make(
        format: TournamentFormat = TournamentFormat.americano,
        status: TournamentStatus = TournamentStatus.published,
        name: str = "Torneo",
        start_date: date = date(2026, 11, 1),
        club_id: int = None,
    ) -> Tournament:
        tournament = Tournament(name=name, format=format, status=status, start_date=start_date, club_id=club_id)
        session.add(tournament)
        session.commit()
        session.refresh(tournament)
        return tournament

    return _make
