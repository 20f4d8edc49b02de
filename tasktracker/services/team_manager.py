"""Team Manager — create and update teams with all-or-nothing member resolution.

Invariants:
    - Every member email must resolve to a registered user, otherwise nothing is written
    - created_by is set once from the caller identity and never touched by update()
    - update() order: empty patch → existence → ownership → member resolution → write
    - Only fields present (non-blank) in the patch are applied

Design Decisions:
    - Ownership delegated to core/authorization.py (require_owner), not inlined here
    - Duplicate emails in the input collapse to one member; order of first appearance kept
"""

import logging
from typing import Any, Mapping
from uuid import UUID

from tasktracker.core.authorization import TEAM_OWNERSHIP, require_owner
from tasktracker.core.domain_types import Identity, parse_identifier
from tasktracker.core.errors import (
    BadRequestError, ErrorContext, MembersNotFoundError, ResourceNotFoundError,
)
from tasktracker.core.repository_protocols import EntityStore
from tasktracker.core.validate_task import is_blank
from tasktracker.models.team import Team, TeamMember
from tasktracker.models.user import User

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS: tuple[str, ...] = ("name", "description", "member_emails")


class TeamManager:
    """Team create/update with ownership enforcement."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def get(self, team_id: str | UUID) -> Team:
        tid = parse_identifier(team_id, "team ID")
        team = await self.store.get(Team, tid)
        if not team:
            raise ResourceNotFoundError(
                "Team", str(tid), ErrorContext(team_id=str(tid)),
            )
        return team

    async def create(
        self,
        name: str | None,
        description: str | None,
        member_emails: list[str] | None,
        identity: Identity,
    ) -> Team:
        if is_blank(name) or is_blank(member_emails):
            raise BadRequestError("Name and member emails are required")

        members = await self._resolve_members(member_emails)
        team = Team(
            name=name,
            description=description,
            created_by=identity.id,
            memberships=_memberships(members),
        )
        team = await self.store.insert(team)
        logger.info(
            "Team created",
            extra={"team_id": str(team.id), "user_id": str(identity.id)},
        )
        return team

    async def update(
        self, team_id: str | UUID, identity: Identity, patch: Mapping[str, Any],
    ) -> Team:
        if all(is_blank(patch.get(f)) for f in PATCHABLE_FIELDS):
            raise BadRequestError("Nothing to update")

        team = await self.get(team_id)
        require_owner(identity, team, TEAM_OWNERSHIP, "Team")

        members = None
        if not is_blank(patch.get("member_emails")):
            members = await self._resolve_members(patch["member_emails"])

        if not is_blank(patch.get("name")):
            team.name = patch["name"]
        if not is_blank(patch.get("description")):
            team.description = patch["description"]
        if members is not None:
            team.memberships = _memberships(members)

        team = await self.store.save(team)
        logger.info(
            "Team updated",
            extra={"team_id": str(team.id), "user_id": str(identity.id)},
        )
        return team

    async def _resolve_members(self, emails: list[str]) -> list[User]:
        """Map emails to users, keeping input order. All must resolve."""
        wanted = list(dict.fromkeys(emails))
        found = await self.store.find(User, User.email.in_(wanted))
        by_email = {u.email: u for u in found}
        missing = [e for e in wanted if e not in by_email]
        if missing:
            logger.info(f"Unresolved member emails: {len(missing)}")
            raise MembersNotFoundError(missing)
        return [by_email[e] for e in wanted]


def _memberships(members: list[User]) -> list[TeamMember]:
    return [
        TeamMember(user_id=user.id, position=i)
        for i, user in enumerate(members)
    ]
