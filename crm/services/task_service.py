"""Task service."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.base import utcnow
from crm.models.task import Task, TaskStatus
from crm.policies import Actor
from crm.schemas.task import TaskCreate, TaskUpdate

from .activity_service import ActivityService


class TaskService:
    """Service for task operations. Access checks happen in the routers."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activities = ActivityService(db)

    def _load_options(self):
        return (selectinload(Task.assignee), selectinload(Task.creator))

    async def get_task(self, task_id: str) -> Task | None:
        result = await self.db.execute(
            select(Task)
            .options(*self._load_options())
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_tasks(
        self,
        actor: Actor,
        status: str | None = None,
        priority: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Task], int]:
        """Tasks by due date; non-admins only see tasks assigned to them."""

        query = select(Task)

        if not actor.is_admin:
            query = query.where(Task.assigned_to == actor.id)
        if status:
            query = query.where(Task.status == status)
        if priority:
            query = query.where(Task.priority == priority)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        query = (
            query.options(*self._load_options())
            .order_by(Task.due_date.asc(), Task.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def create_task(self, actor: Actor, data: TaskCreate) -> Task:
        """Create a task; the actor is the creator and the default assignee."""

        values = data.model_dump()
        values["assigned_to"] = values.get("assigned_to") or actor.id

        task = Task(**values, created_by=actor.id)
        if task.status == TaskStatus.COMPLETED.value:
            task.completed_at = utcnow()

        self.db.add(task)
        await self.db.flush()

        self.activities.record(
            user_id=actor.id,
            type="task_created",
            title=f"Created task: {task.title}",
            related_to_type="task",
            related_to_id=task.id,
        )
        await self.db.commit()

        return await self.get_task(task.id)

    async def update_task(self, actor: Actor, task: Task, data: TaskUpdate) -> Task:
        """Apply a partial update and keep ``completed_at`` in step with status."""

        old_status = task.status
        task.apply_updates(data.model_dump(exclude_unset=True))

        if task.status != old_status:
            if task.status == TaskStatus.COMPLETED.value:
                task.completed_at = utcnow()
            elif old_status == TaskStatus.COMPLETED.value:
                task.completed_at = None

        self.activities.record(
            user_id=actor.id,
            type="task_updated",
            title=f"Updated task: {task.title}",
            related_to_type="task",
            related_to_id=task.id,
        )
        await self.db.commit()

        return await self.get_task(task.id)

    async def delete_task(self, actor: Actor, task: Task) -> None:
        task_title = task.title
        task_id = task.id

        await self.db.delete(task)
        self.activities.record(
            user_id=actor.id,
            type="task_deleted",
            title=f"Deleted task: {task_title}",
            related_to_type="task",
            related_to_id=task_id,
        )
        await self.db.commit()
