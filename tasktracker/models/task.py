"""Task ORM — a unit of work with a status, optional due date and optional assignee.

Invariants:
    - title is globally unique (5-100 chars, enforced by the validator before insert)
    - status is "open" or "closed"
    - due_date is a calendar date, no time component
    - comments are owned by the task: deleting the task deletes them

Design Decisions:
    - Date column for due_date: day/month/year round-trip exactly, no timezone drift
    - comments loaded with selectin, ordered by created_at then id: responses always
      include them and async sessions cannot lazy-load
"""

import uuid
from datetime import date, datetime, timezone
from typing import ClassVar

from sqlalchemy import String, Text, Date, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasktracker.db.base import Base


class Task(Base):
    __tablename__ = "tasks"
    natural_key: ClassVar[str] = "title"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True, index=True,
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

    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="task",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[Comment.created_at, Comment.seq]",
    )
