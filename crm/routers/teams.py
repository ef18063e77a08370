"""Team routes."""

from fastapi import APIRouter, Depends, status

from crm.dependencies.auth import require_permission
from crm.dependencies.services import get_team_service
from crm.policies import Actor
from crm.schemas.common import SuccessResponse
from crm.schemas.team import TeamCreate, TeamMembersUpdate, TeamResponse
from crm.services.team_service import TeamService

router = APIRouter()


@router.get("/", response_model=SuccessResponse[list[TeamResponse]])
async def list_teams(
    actor: Actor = Depends(require_permission("teams:read")),
    team_service: TeamService = Depends(get_team_service),
):
    """List teams with their manager and members."""

    teams = await team_service.list_teams()
    return SuccessResponse(data=[TeamResponse.model_validate(t) for t in teams])


@router.post("/", response_model=SuccessResponse[TeamResponse], status_code=status.HTTP_201_CREATED)
async def create_team(
    team_create: TeamCreate,
    actor: Actor = Depends(require_permission("teams:create")),
    team_service: TeamService = Depends(get_team_service),
):
    team = await team_service.create_team(team_create)

    return SuccessResponse(
        message="Team created successfully",
        data=TeamResponse.model_validate(team),
    )


@router.put("/{team_id}/members", response_model=SuccessResponse[TeamResponse])
async def update_members(
    team_id: str,
    members_update: TeamMembersUpdate,
    actor: Actor = Depends(require_permission("teams:update")),
    team_service: TeamService = Depends(get_team_service),
):
    team = await team_service.set_members(team_id, members_update.members)

    return SuccessResponse(
        message="Team members updated successfully",
        data=TeamResponse.model_validate(team),
    )
