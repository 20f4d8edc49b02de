"""Team Schemas — create/update bodies and the team response.

Invariants:
    - name 3-100 chars, description at most 1000 chars (checked at the boundary)
    - A blank name passes the schema so TeamManager can report it as a missing field
    - TeamUpdate fields are all optional; an all-empty patch is rejected by TeamManager
    - members are returned as user ids in stored order; created_by is read-only
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

TEAM_NAME_MIN_LENGTH: int = 3


def _check_name_length(v: str | None) -> str | None:
    if v and v.strip() and len(v) < TEAM_NAME_MIN_LENGTH:
        raise ValueError(
            f"name must be at least {TEAM_NAME_MIN_LENGTH} characters long",
        )
    return v


class TeamCreate(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    member_emails: list[str] | None = None

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str | None) -> str | None:
        return _check_name_length(v)


class TeamUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    member_emails: list[str] | None = None

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str | None) -> str | None:
        return _check_name_length(v)


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    members: list[UUID]
    created_by: UUID
    created_at: datetime
    updated_at: datetime
