"""Team ORM — a named group of users owned by its creator.

Invariants:
    - name is globally unique (3-100 chars)
    - created_by references an existing user and never changes after insert
    - memberships keep the order members were given in (position column)

Design Decisions:
    - TeamMember association rows with a surrogate id: replacing the member list
      inserts new rows before the orphaned ones are deleted, so (team_id, user_id)
      cannot be the primary key
"""

import uuid
from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasktracker.db.base import Base


class Team(Base):
    __tablename__ = "teams"
    natural_key: ClassVar[str] = "name"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    memberships: Mapped[list["TeamMember"]] = relationship(
        "TeamMember", back_populates="team",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="TeamMember.position",
    )

    @property
    def members(self) -> list[uuid.UUID]:
        return [m.user_id for m in self.memberships]


class TeamMember(Base):
    __tablename__ = "team_members"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    team_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    team: Mapped["Team"] = relationship("Team", back_populates="memberships")
