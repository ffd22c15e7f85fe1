from papaya.models.match import Match, MatchStatus
from papaya.models.participant import Participant
from papaya.models.tournament import Tournament, TournamentFormat, TournamentStatus
from papaya.models.user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "Tournament",
    "TournamentFormat",
    "TournamentStatus",
    "Participant",
    "Match",
    "MatchStatus",
]
