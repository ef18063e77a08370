"""Deal routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from crm.dependencies.auth import require_permission
from crm.dependencies.database import get_db
from crm.dependencies.services import get_activity_service, get_deal_service
from crm.models.deal import DealStage
from crm.policies import Actor, ensure_manager_access, require_ownership
from crm.schemas.activity import ActivityResponse
from crm.schemas.common import BaseResponse, PaginationMeta, SuccessResponse
from crm.schemas.deal import DealCreate, DealList, DealResponse, DealUpdate
from crm.services.activity_service import ActivityService
from crm.services.deal_service import DealService

router = APIRouter()


@router.get("/", response_model=SuccessResponse[DealList])
async def list_deals(
    actor: Actor = Depends(require_permission("deals:read")),
    service: DealService = Depends(get_deal_service),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    stage: DealStage | None = Query(None, description="Pipeline stage"),
    priority: str | None = Query(None, pattern="^(low|medium|high)$"),
):
    """List deals. Non-admins only see deals they own."""

    deals, total = await service.list_deals(
        actor,
        stage=stage.value if stage else None,
        priority=priority,
        page=page,
        limit=limit,
    )

    return SuccessResponse(
        data=DealList(
            deals=[DealResponse.model_validate(d) for d in deals],
            pagination=PaginationMeta.build(page, limit, total),
        )
    )


@router.post("/", response_model=SuccessResponse[DealResponse], status_code=status.HTTP_201_CREATED)
async def create_deal(
    deal_create: DealCreate,
    actor: Actor = Depends(require_permission("deals:create")),
    service: DealService = Depends(get_deal_service),
):
    deal = await service.create_deal(actor, deal_create)

    return SuccessResponse(
        message="Deal created successfully",
        data=DealResponse.model_validate(deal),
    )


@router.get("/{deal_id}", response_model=SuccessResponse[DealResponse])
async def get_deal(
    deal_id: str,
    actor: Actor = Depends(require_permission("deals:read")),
    service: DealService = Depends(get_deal_service),
):
    deal = await service.get_deal(deal_id)
    require_ownership(actor, deal, "owner_id")

    return SuccessResponse(data=DealResponse.model_validate(deal))


@router.put("/{deal_id}", response_model=SuccessResponse[DealResponse])
async def update_deal(
    deal_id: str,
    deal_update: DealUpdate,
    actor: Actor = Depends(require_permission("deals:update")),
    service: DealService = Depends(get_deal_service),
):
    """Update a deal; a stage change is logged as its own activity."""

    deal = await service.get_deal(deal_id)
    require_ownership(actor, deal, "owner_id")

    deal = await service.update_deal(actor, deal, deal_update)

    return SuccessResponse(
        message="Deal updated successfully",
        data=DealResponse.model_validate(deal),
    )


@router.delete("/{deal_id}", response_model=BaseResponse)
async def delete_deal(
    deal_id: str,
    actor: Actor = Depends(require_permission("deals:delete")),
    service: DealService = Depends(get_deal_service),
):
    deal = await service.get_deal(deal_id)
    require_ownership(actor, deal, "owner_id")

    await service.delete_deal(actor, deal)

    return BaseResponse(message="Deal deleted successfully")


@router.get("/{deal_id}/activities", response_model=SuccessResponse[list[ActivityResponse]])
async def get_deal_activities(
    deal_id: str,
    actor: Actor = Depends(require_permission("activities:read")),
    service: DealService = Depends(get_deal_service),
    activity_service: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db),
):
    """Activity timeline of a deal, visible to the owner's direct manager."""

    deal = await service.get_deal(deal_id)
    await ensure_manager_access(db, actor, deal)

    activities = await activity_service.list_for_resource("deal", deal.id)

    return SuccessResponse(data=[ActivityResponse.model_validate(a) for a in activities])
