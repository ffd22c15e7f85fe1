"""
Authorization and existence guards

Provides reusable guards shared by the services layer:
- Role permission checks for an authenticated caller
- Tournament existence lookups
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet

from sqlmodel import Session, select

from papaya.errors import Forbidden, NotFound
from papaya.models.tournament import Tournament
from papaya.models.user import UserRole


MAX_ROW_ID = 2**63 - 1


class Permission(str, Enum):
    create_tournament = "create_tournament"
    approve_tournament = "approve_tournament"
    generate_schedule = "generate_schedule"
    register_as_player = "register_as_player"


# Every UserRole must have an entry; a role missing here is denied everything
ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[Permission]] = {
    UserRole.jugador: frozenset({Permission.register_as_player}),
    UserRole.club: frozenset(
        {Permission.create_tournament, Permission.generate_schedule, Permission.register_as_player}
    ),
    UserRole.superadmin: frozenset(Permission),
}


@dataclass(frozen=True)
class Caller:
    """Authenticated identity of the user issuing an operation."""

    user_id: int
    role: UserRole


def has_permission(caller: Caller, permission: Permission) -> bool:
    return permission in ROLE_PERMISSIONS.get(UserRole(caller.role), frozenset())


def require_permission(caller: Caller, permission: Permission) -> None:
    """
    Require that the caller's role grants a permission.

    Raises:
        Forbidden: role does not grant the permission
    """
    if not has_permission(caller, permission):
        raise Forbidden(f"Role '{UserRole(caller.role).value}' may not {permission.value.replace('_', ' ')}")


def get_tournament_or_raise(session: Session, tournament_id: int, for_update: bool = False) -> Tournament:
    """
    Get a tournament or raise NotFound.

    Args:
        session: Database session
        tournament_id: Tournament ID
        for_update: Lock the row for the rest of the transaction (no-op on SQLite)

    Returns:
        Tournament

    Raises:
        NotFound: Tournament does not exist
    """
    # Ids outside the signed 64-bit key range cannot exist and cannot be bound
    if not 1 <= tournament_id <= MAX_ROW_ID:
        raise NotFound(f"Tournament {tournament_id} not found")

    query = select(Tournament).where(Tournament.id == tournament_id)
    if for_update:
        query = query.with_for_update()
    tournament = session.exec(query).first()

    if not tournament:
        raise NotFound(f"Tournament {tournament_id} not found")

    return tournament
