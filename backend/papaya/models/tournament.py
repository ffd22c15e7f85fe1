from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, String
from sqlmodel import Column, Field, Relationship, SQLModel

from papaya.utils.timestamps import utc_now

if TYPE_CHECKING:
    from papaya.models.match import Match
    from papaya.models.participant import Participant
    from papaya.models.user import User


class TournamentFormat(str, Enum):
    americano = "americano"
    knockout = "knockout"
    groups_knockout = "groups_knockout"


class TournamentStatus(str, Enum):
    pending_approval = "pending_approval"
    published = "published"


class Tournament(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    # Seeded demo tournaments have no owning club
    club_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)
    format: TournamentFormat = Field(sa_column=Column(String, nullable=False))
    start_date: date
    end_date: Optional[date] = None
    capacity: Optional[int] = None  # informational, registration does not enforce it
    status: TournamentStatus = Field(
        default=TournamentStatus.pending_approval, sa_column=Column(String, nullable=False, index=True)
    )
    settings: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False, onupdate=utc_now)
    )

    # Relationships
    club: Optional["User"] = Relationship(back_populates="tournaments")
    participants: List["Participant"] = Relationship(back_populates="tournament")
    matches: List["Match"] = Relationship(back_populates="tournament")
