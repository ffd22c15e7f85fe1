from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, String
from sqlmodel import Column, Field, Relationship, SQLModel

from papaya.utils.timestamps import utc_now

if TYPE_CHECKING:
    from papaya.models.participant import Participant
    from papaya.models.tournament import Tournament


class UserRole(str, Enum):
    jugador = "jugador"
    club = "club"
    superadmin = "superadmin"


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str  # bcrypt, never the plaintext
    role: UserRole = Field(default=UserRole.jugador, sa_column=Column(String, nullable=False))
    city: Optional[str] = None
    level: Optional[float] = None
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    tournaments: List["Tournament"] = Relationship(back_populates="club")
    registrations: List["Participant"] = Relationship(back_populates="user")
