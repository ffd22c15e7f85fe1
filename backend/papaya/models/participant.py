from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime
from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Column, Field, Relationship, SQLModel

from papaya.utils.timestamps import utc_now

if TYPE_CHECKING:
    from papaya.models.tournament import Tournament
    from papaya.models.user import User


class Participant(SQLModel, table=True):
    __table_args__ = (
        # At most one registration per user per tournament
        SAUniqueConstraint("tournament_id", "user_id", name="uq_participant_tournament_user"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    tournament_id: int = Field(foreign_key="tournament.id", index=True)
    user_id: int = Field(foreign_key="user.id")
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    tournament: "Tournament" = Relationship(back_populates="participants")
    user: "User" = Relationship(back_populates="registrations")
