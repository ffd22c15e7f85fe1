"""
Americano Round Generation

Pure circle-method scheduler for americano doubles. Works on 0-based
positions into the ordered player list, then maps positions back to player
identifiers:

- Odd player counts get one BYE position appended
- Each round pairs position i with position n-1-i; pairs touching the BYE sit out
- Consecutive surviving pairs form the two teams of a match; a leftover pair is dropped
- Rotation keeps position 0 fixed and moves the last position to slot 1

No randomness and no input mutation: the same ordered input always yields the
same schedule.
"""

from dataclasses import dataclass
from typing import Generic, List, Sequence, Tuple, TypeVar

from papaya.errors import InsufficientPlayers

P = TypeVar("P")

MIN_PLAYERS = 2


@dataclass(frozen=True)
class AmericanoMatch(Generic[P]):
    """One doubles match: two teams of two players."""

    team_a: Tuple[P, P]
    team_b: Tuple[P, P]

    def players(self) -> Tuple[P, P, P, P]:
        return self.team_a + self.team_b


Round = List[AmericanoMatch[P]]


def padded_size(player_count: int) -> int:
    """Working list size after adding a BYE for odd counts."""
    return player_count + 1 if player_count % 2 == 1 else player_count


def round_count(player_count: int) -> int:
    """Number of rounds generate_rounds() produces for player_count players."""
    if player_count < MIN_PLAYERS:
        return 0
    return padded_size(player_count) - 1


def rotate(positions: Sequence[int]) -> List[int]:
    """Circle-method rotation: keep the anchor, move the last entry to slot 1."""
    return [positions[0], positions[-1], *positions[1:-1]]


def round_pairs(positions: Sequence[int], bye_position: int) -> List[Tuple[int, int]]:
    """
    Pair position i with n-1-i for one round, skipping pairs with the BYE.

    Returns pairs in position order.
    """
    n = len(positions)
    pairs: List[Tuple[int, int]] = []
    for i in range(n // 2):
        a, b = positions[i], positions[n - 1 - i]
        if a == bye_position or b == bye_position:
            continue
        pairs.append((a, b))
    return pairs


def generate_rounds(players: Sequence[P]) -> List[Round]:
    """
    Generate the full americano schedule for an ordered list of distinct players.

    Args:
        players: Player identifiers in registration order

    Returns:
        n-1 rounds (n = player count rounded up to even), each a list of
        matches in generation order. Rounds may be empty.

    Raises:
        InsufficientPlayers: fewer than 2 players
    """
    if len(players) < MIN_PLAYERS:
        raise InsufficientPlayers(f"Need at least {MIN_PLAYERS} players, got {len(players)}")

    n = padded_size(len(players))
    bye_position = len(players) if n != len(players) else -1
    positions = list(range(n))

    rounds: List[Round] = []
    for _ in range(n - 1):
        pairs = round_pairs(positions, bye_position)
        matches: Round = []
        # Team A is pair 2k, team B is pair 2k+1; an odd leftover pair is dropped
        for k in range(len(pairs) // 2):
            (a1, a2), (b1, b2) = pairs[2 * k], pairs[2 * k + 1]
            matches.append(
                AmericanoMatch(
                    team_a=(players[a1], players[a2]),
                    team_b=(players[b1], players[b2]),
                )
            )
        rounds.append(matches)
        positions = rotate(positions)

    return rounds
