"""Workflow service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.workflow import Workflow
from crm.policies import Actor
from crm.schemas.workflow import WorkflowCreate
from crm.utils.exceptions import NotFoundError


class WorkflowService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_workflow(self, workflow_id: str) -> Workflow | None:
        result = await self.db.execute(
            select(Workflow)
            .options(selectinload(Workflow.creator))
            .where(Workflow.id == workflow_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_workflows(self) -> list[Workflow]:
        result = await self.db.execute(
            select(Workflow)
            .options(selectinload(Workflow.creator))
            .order_by(Workflow.created_at.desc())
        )
        return list(result.scalars().all())

    async def create_workflow(self, actor: Actor, data: WorkflowCreate) -> Workflow:
        workflow = Workflow(**data.model_dump(), created_by=actor.id)
        self.db.add(workflow)
        await self.db.commit()
        return await self.get_workflow(workflow.id)

    async def set_active(self, workflow_id: str, is_active: bool) -> Workflow:
        """Switch a workflow on or off."""
        workflow = await self.get_workflow(workflow_id)
        if not workflow:
            raise NotFoundError("Workflow not found")

        workflow.is_active = is_active
        await self.db.commit()
        return await self.get_workflow(workflow_id)
