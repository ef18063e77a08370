"""Activity feed routes."""

from fastapi import APIRouter, Depends, Query, status

from crm.dependencies.auth import require_permission
from crm.dependencies.services import get_activity_service
from crm.policies import Actor
from crm.schemas.activity import ActivityCreate, ActivityList, ActivityResponse
from crm.schemas.common import PaginationMeta, SuccessResponse
from crm.services.activity_service import ActivityService

router = APIRouter()


@router.get("/", response_model=SuccessResponse[ActivityList])
async def list_activities(
    actor: Actor = Depends(require_permission("activities:read")),
    service: ActivityService = Depends(get_activity_service),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(50, ge=1, le=100, description="Items per page"),
    type: str | None = Query(None, description="Activity type"),
    user_id: str | None = Query(None, description="Acting user"),
):
    activities, total = await service.list_activities(
        type=type, user_id=user_id, page=page, limit=limit
    )

    return SuccessResponse(
        data=ActivityList(
            activities=[ActivityResponse.model_validate(a) for a in activities],
            pagination=PaginationMeta.build(page, limit, total),
        )
    )


@router.post(
    "/", response_model=SuccessResponse[ActivityResponse], status_code=status.HTTP_201_CREATED
)
async def create_activity(
    activity_create: ActivityCreate,
    actor: Actor = Depends(require_permission("activities:create")),
    service: ActivityService = Depends(get_activity_service),
):
    """Log an activity as the caller."""

    activity = await service.create_activity(actor, activity_create)

    return SuccessResponse(
        message="Activity logged successfully",
        data=ActivityResponse.model_validate(activity),
    )
