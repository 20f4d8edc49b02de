"""Team Routes — create, read and owner-only update of teams.

Invariants:
    - Every route requires a verified caller (get_identity)
    - Ownership is enforced inside TeamManager, never in the route
"""

from fastapi import APIRouter, Depends, status

from tasktracker.api.dependencies import get_team_manager
from tasktracker.api.identity import get_identity
from tasktracker.core.domain_types import Identity
from tasktracker.schemas.team import TeamCreate, TeamResponse, TeamUpdate
from tasktracker.services.team_manager import TeamManager

router = APIRouter(prefix="/api/v1/teams", tags=["teams"])


@router.post(
    "", response_model=TeamResponse, status_code=status.HTTP_201_CREATED,
)
async def create_team(
    body: TeamCreate,
    identity: Identity = Depends(get_identity),
    manager: TeamManager = Depends(get_team_manager),
):
    """Create a team owned by the caller. All member emails must be registered."""
    team = await manager.create(
        body.name, body.description, body.member_emails, identity,
    )
    return TeamResponse.model_validate(team)


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(
    team_id: str,
    identity: Identity = Depends(get_identity),
    manager: TeamManager = Depends(get_team_manager),
):
    return TeamResponse.model_validate(await manager.get(team_id))


@router.put("/{team_id}", response_model=TeamResponse)
async def update_team(
    team_id: str,
    body: TeamUpdate,
    identity: Identity = Depends(get_identity),
    manager: TeamManager = Depends(get_team_manager),
):
    """Update name, description or members. Only the team's creator may do this."""
    team = await manager.update(
        team_id, identity, body.model_dump(exclude_unset=True),
    )
    return TeamResponse.model_validate(team)
