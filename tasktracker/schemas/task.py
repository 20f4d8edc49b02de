"""Task Schemas — request bodies and response shapes for the task endpoints.

Invariants:
    - TaskPayload fields are all optional strings: the ordered task validator, not
      Pydantic, decides which rule a bad payload violates
    - due_date travels as DD-MM-YYYY on input and as an ISO date on output
    - Responses never expose ORM internals (comment seq, relationship objects)

Design Decisions:
    - from_attributes=True: responses are built straight from ORM rows
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TaskPayload(BaseModel):
    """Create/update body. Blank fields on update leave the stored value unchanged."""
    title: str | None = None
    description: str | None = None
    status: str | None = None
    due_date: str | None = None


class AssignRequest(BaseModel):
    assigned_to: str | None = None


class CommentCreate(BaseModel):
    text: str | None = Field(None, max_length=1000)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    text: str
    created_at: datetime


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    status: str
    due_date: date | None = None
    assigned_to: UUID | None = None
    comments: list[CommentResponse] = []
    created_at: datetime
    updated_at: datetime
