"""Summary reporting service."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.contact import Contact
from crm.models.deal import CLOSED_STAGES, Deal, DealStage
from crm.models.task import Task
from crm.policies import Actor
from crm.schemas.report import SummaryReport


class ReportService:
    """Aggregates for the dashboard. Non-admins only see their own records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def summary(self, actor: Actor) -> SummaryReport:
        deal_scope = [] if actor.is_admin else [Deal.owner_id == actor.id]
        task_scope = [] if actor.is_admin else [Task.assigned_to == actor.id]
        contact_scope = [] if actor.is_admin else [Contact.owner_id == actor.id]

        stage_rows = await self.db.execute(
            select(Deal.stage, func.count(Deal.id)).where(*deal_scope).group_by(Deal.stage)
        )
        deals_by_stage = {stage: count for stage, count in stage_rows.all()}

        priority_rows = await self.db.execute(
            select(Task.priority, func.count(Task.id)).where(*task_scope).group_by(Task.priority)
        )
        tasks_by_priority = {priority: count for priority, count in priority_rows.all()}

        open_deals = sum(
            count for stage, count in deals_by_stage.items() if stage not in CLOSED_STAGES
        )

        won_revenue = await self.db.scalar(
            select(func.coalesce(func.sum(Deal.value), 0)).where(
                Deal.stage == DealStage.CLOSED_WON.value, *deal_scope
            )
        )

        contact_count = await self.db.scalar(
            select(func.count(Contact.id)).where(*contact_scope)
        )

        return SummaryReport(
            deals_by_stage=deals_by_stage,
            tasks_by_priority=tasks_by_priority,
            open_deals=open_deals,
            won_revenue=float(won_revenue or 0),
            contact_count=contact_count or 0,
        )
