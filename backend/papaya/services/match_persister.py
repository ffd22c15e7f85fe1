"""
Match Persister

Regenerates a tournament's americano schedule from its current participants.
The old match set is wiped and the new one inserted in a single transaction,
so the stored matches always come from exactly one generator run.

Regeneration for a tournament is serialized in-process with one of a fixed
pool of striped locks, and across processes by locking the tournament row
(SELECT ... FOR UPDATE) for the duration of the transaction.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from papaya.errors import InsufficientPlayers, PapayaError, StoreFailure, UnsupportedFormat
from papaya.models.match import Match, MatchStatus
from papaya.models.participant import Participant
from papaya.models.tournament import TournamentFormat
from papaya.services.americano import MIN_PLAYERS, Round, generate_rounds
from papaya.utils.guards import Caller, Permission, get_tournament_or_raise, require_permission

logger = logging.getLogger(__name__)

# Fixed pool of locks; tournaments sharing a stripe serialize with each other
LOCK_STRIPES = 64
_regeneration_locks: Tuple[threading.Lock, ...] = tuple(threading.Lock() for _ in range(LOCK_STRIPES))


@dataclass(frozen=True)
class ScheduleSummary:
    tournament_id: int
    round_count: int
    match_count: int


def lock_for(tournament_id: int) -> threading.Lock:
    return _regeneration_locks[tournament_id % LOCK_STRIPES]


@contextmanager
def regeneration_lock(tournament_id: int) -> Iterator[None]:
    """Hold the in-process regeneration lock for one tournament."""
    with lock_for(tournament_id):
        yield


def registered_player_ids(session: Session, tournament_id: int) -> List[int]:
    """User ids of a tournament's participants in registration order."""
    return list(
        session.exec(
            select(Participant.user_id).where(Participant.tournament_id == tournament_id).order_by(Participant.id)
        ).all()
    )


def wipe_matches_for_tournament(session: Session, tournament_id: int) -> int:
    """Delete every match of a tournament inside the current transaction.

    Returns the number of deleted matches. Does not commit.
    """
    existing_matches = session.exec(select(Match).where(Match.tournament_id == tournament_id)).all()
    for match in existing_matches:
        session.delete(match)

    # Flush so the deletes precede the inserts of the new set
    session.flush()
    return len(existing_matches)


def build_matches(tournament_id: int, rounds: Sequence[Round]) -> List[Match]:
    """Turn generated rounds into Match rows (1-based round and sequence)."""
    matches: List[Match] = []
    for round_number, round_matches in enumerate(rounds, start=1):
        for sequence, generated in enumerate(round_matches, start=1):
            matches.append(
                Match(
                    tournament_id=tournament_id,
                    round=round_number,
                    sequence_in_round=sequence,
                    team_a=list(generated.team_a),
                    team_b=list(generated.team_b),
                    status=MatchStatus.scheduled,
                )
            )
    return matches


def generate_and_persist(session: Session, caller: Caller, tournament_id: int) -> ScheduleSummary:
    """
    Regenerate and store the americano schedule of a tournament.

    Raises:
        Forbidden: caller is not a club or superadmin
        NotFound: tournament does not exist
        UnsupportedFormat: tournament is not americano
        InsufficientPlayers: fewer than 2 registered players
        StoreFailure: database error; the previous match set is left untouched
    """
    require_permission(caller, Permission.generate_schedule)

    with regeneration_lock(tournament_id):
        try:
            tournament = get_tournament_or_raise(session, tournament_id, for_update=True)
            if tournament.format != TournamentFormat.americano:
                fmt = TournamentFormat(tournament.format).value
                raise UnsupportedFormat(f"Tournament {tournament_id} is '{fmt}', not americano")

            players = registered_player_ids(session, tournament_id)
            if len(players) < MIN_PLAYERS:
                raise InsufficientPlayers(
                    f"Tournament {tournament_id} has {len(players)} registered players, need at least {MIN_PLAYERS}"
                )

            rounds = generate_rounds(players)
            matches = build_matches(tournament_id, rounds)

            deleted = wipe_matches_for_tournament(session, tournament_id)
            session.add_all(matches)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Schedule regeneration failed for tournament %d", tournament_id)
            raise StoreFailure(f"Failed to store schedule for tournament {tournament_id}") from e
        except PapayaError:
            # Release the row lock before reporting the domain error
            session.rollback()
            raise

    logger.info(
        "Tournament %d schedule regenerated: %d players, %d rounds, %d matches (replaced %d)",
        tournament_id,
        len(players),
        len(rounds),
        len(matches),
        deleted,
    )
    return ScheduleSummary(tournament_id=tournament_id, round_count=len(rounds), match_count=len(matches))


def list_matches(session: Session, tournament_id: int) -> List[Match]:
    """Matches of a tournament ordered by round, then position within the round"""
    get_tournament_or_raise(session, tournament_id)
    return list(
        session.exec(
            select(Match)
            .where(Match.tournament_id == tournament_id)
            .order_by(Match.round, Match.sequence_in_round, Match.id)
        ).all()
    )
