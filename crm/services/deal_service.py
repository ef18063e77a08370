"""Deal service."""

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.base import utcnow
from crm.models.deal import CLOSED_STAGES, Deal
from crm.policies import Actor
from crm.schemas.deal import DealCreate, DealUpdate

from .activity_service import ActivityService

logger = logging.getLogger(__name__)


class DealService:
    """Service for deal operations. Access checks happen in the routers."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activities = ActivityService(db)

    async def get_deal(self, deal_id: str) -> Deal | None:
        result = await self.db.execute(
            select(Deal)
            .options(selectinload(Deal.owner), selectinload(Deal.contact))
            .where(Deal.id == deal_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_deals(
        self,
        actor: Actor,
        stage: str | None = None,
        priority: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Deal], int]:
        """Deals newest first; non-admins only see their own."""

        query = select(Deal)

        if not actor.is_admin:
            query = query.where(Deal.owner_id == actor.id)
        if stage:
            query = query.where(Deal.stage == stage)
        if priority:
            query = query.where(Deal.priority == priority)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        query = (
            query.options(selectinload(Deal.owner), selectinload(Deal.contact))
            .order_by(Deal.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def create_deal(self, actor: Actor, data: DealCreate) -> Deal:
        """Create a deal owned by the actor."""

        values = data.model_dump()
        values["value"] = Decimal(str(values["value"]))

        deal = Deal(**values, owner_id=actor.id)
        self.db.add(deal)
        await self.db.flush()

        self.activities.record(
            user_id=actor.id,
            type="deal_created",
            title=f"Created deal: {deal.title}",
            related_to_type="deal",
            related_to_id=deal.id,
        )
        await self.db.commit()

        logger.info(f"Deal created: {deal.id}", extra={"user_id": actor.id})
        return await self.get_deal(deal.id)

    async def update_deal(self, actor: Actor, deal: Deal, data: DealUpdate) -> Deal:
        """Apply a partial update, logging stage moves separately."""

        old_stage = deal.stage
        updates = data.model_dump(exclude_unset=True)
        if updates.get("value") is not None:
            updates["value"] = Decimal(str(updates["value"]))

        deal.apply_updates(updates)

        if deal.stage != old_stage:
            if deal.stage in CLOSED_STAGES and deal.actual_close_date is None:
                deal.actual_close_date = utcnow()
            self.activities.record(
                user_id=actor.id,
                type="deal_stage_changed",
                title=f'Deal "{deal.title}" moved from {old_stage} to {deal.stage}',
                related_to_type="deal",
                related_to_id=deal.id,
                meta={"old_stage": old_stage, "new_stage": deal.stage},
            )
        else:
            self.activities.record(
                user_id=actor.id,
                type="deal_updated",
                title=f"Updated deal: {deal.title}",
                related_to_type="deal",
                related_to_id=deal.id,
            )
        await self.db.commit()

        return await self.get_deal(deal.id)

    async def delete_deal(self, actor: Actor, deal: Deal) -> None:
        deal_title = deal.title
        deal_id = deal.id

        await self.db.delete(deal)
        self.activities.record(
            user_id=actor.id,
            type="deal_deleted",
            title=f"Deleted deal: {deal_title}",
            related_to_type="deal",
            related_to_id=deal_id,
        )
        await self.db.commit()

        logger.info(f"Deal deleted: {deal_id}", extra={"user_id": actor.id})
