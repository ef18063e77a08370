"""Activity feed service."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.activity import Activity
from crm.policies import Actor
from crm.schemas.activity import ActivityCreate


class ActivityService:
    """Service for recording and listing activities."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def record(
        self,
        user_id: str,
        type: str,
        title: str,
        related_to_type: str | None = None,
        related_to_id: str | None = None,
        description: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> Activity:
        """Add an activity to the current unit of work; the caller commits."""
        activity = Activity(
            user_id=user_id,
            type=type,
            title=title,
            description=description,
            related_to_type=related_to_type,
            related_to_id=related_to_id,
            meta=meta or {},
        )
        self.db.add(activity)
        return activity

    async def get_activity(self, activity_id: str) -> Activity | None:
        result = await self.db.execute(
            select(Activity)
            .options(selectinload(Activity.user))
            .where(Activity.id == activity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_activity(self, actor: Actor, data: ActivityCreate) -> Activity:
        """Log an activity on behalf of the actor."""
        activity = self.record(
            user_id=actor.id,
            type=data.type,
            title=data.title,
            description=data.description,
            related_to_type=data.related_to_type,
            related_to_id=data.related_to_id,
            meta=data.metadata,
        )
        await self.db.commit()
        return await self.get_activity(activity.id)

    async def list_activities(
        self,
        type: str | None = None,
        user_id: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[Activity], int]:
        """Activities newest first, optionally filtered by type and user."""

        query = select(Activity)
        if type:
            query = query.where(Activity.type == type)
        if user_id:
            query = query.where(Activity.user_id == user_id)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        query = (
            query.options(selectinload(Activity.user))
            .order_by(Activity.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def list_for_resource(self, related_to_type: str, related_to_id: str) -> list[Activity]:
        """Timeline of a single contact or deal, newest first."""
        result = await self.db.execute(
            select(Activity)
            .options(selectinload(Activity.user))
            .where(
                Activity.related_to_type == related_to_type,
                Activity.related_to_id == related_to_id,
            )
            .order_by(Activity.created_at.desc())
        )
        return list(result.scalars().all())
