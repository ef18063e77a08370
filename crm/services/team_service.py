"""Team service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.team import Team, TeamMember
from crm.schemas.team import TeamCreate, TeamMemberInput
from crm.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class TeamService:
    """Service for team and membership operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _load_options(self):
        return (
            selectinload(Team.manager),
            selectinload(Team.memberships).selectinload(TeamMember.user),
        )

    async def get_team(self, team_id: str) -> Team | None:
        result = await self.db.execute(
            select(Team)
            .options(*self._load_options())
            .where(Team.id == team_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_teams(self) -> list[Team]:
        """All teams with their manager and members."""
        result = await self.db.execute(
            select(Team).options(*self._load_options()).order_by(Team.name)
        )
        return list(result.scalars().all())

    @staticmethod
    def _memberships(members: list[TeamMemberInput]) -> list[TeamMember]:
        # Last entry wins when a user is listed twice
        by_user = {member.user_id: member.role for member in members}
        return [TeamMember(user_id=user_id, role=role) for user_id, role in by_user.items()]

    async def create_team(self, data: TeamCreate) -> Team:
        team = Team(
            name=data.name,
            description=data.description,
            manager_id=data.manager_id,
            parent_team_id=data.parent_team_id,
        )
        team.memberships = self._memberships(data.members)

        self.db.add(team)
        await self.db.commit()

        logger.info(f"Team created: {team.name}", extra={"team_id": team.id})
        return await self.get_team(team.id)

    async def set_members(self, team_id: str, members: list[TeamMemberInput]) -> Team:
        """Replace the member list of a team."""

        team = await self.get_team(team_id)
        if not team:
            raise NotFoundError("Team not found")

        team.memberships.clear()
        # Flush the removals first so re-added users do not hit the unique constraint
        await self.db.flush()
        team.memberships.extend(self._memberships(members))
        await self.db.commit()

        logger.info(
            f"Members updated for team {team.name}",
            extra={"team_id": team_id, "member_count": len(members)},
        )
        return await self.get_team(team_id)
