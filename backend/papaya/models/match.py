from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, DateTime, String
from sqlmodel import Column, Field, Relationship, SQLModel

from papaya.utils.timestamps import utc_now

if TYPE_CHECKING:
    from papaya.models.tournament import Tournament


class MatchStatus(str, Enum):
    scheduled = "scheduled"


class Match(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    tournament_id: int = Field(foreign_key="tournament.id", index=True)
    round: int  # 1-based
    sequence_in_round: int  # 1-based position within the generated round

    # Doubles teams: exactly two user ids each
    team_a: List[int] = Field(sa_column=Column(JSON, nullable=False))
    team_b: List[int] = Field(sa_column=Column(JSON, nullable=False))

    status: MatchStatus = Field(default=MatchStatus.scheduled, sa_column=Column(String, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    tournament: "Tournament" = Relationship(back_populates="matches")
