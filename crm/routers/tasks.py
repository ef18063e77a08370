"""Task routes."""

from fastapi import APIRouter, Depends, Query, status

from crm.dependencies.auth import require_permission
from crm.dependencies.services import get_task_service
from crm.models.task import TaskPriority, TaskStatus
from crm.policies import Actor, require_ownership
from crm.schemas.common import BaseResponse, PaginationMeta, SuccessResponse
from crm.schemas.task import TaskCreate, TaskList, TaskResponse, TaskUpdate
from crm.services.task_service import TaskService

router = APIRouter()

# Either the assignee or the creator may view and edit a task
TASK_OWNER_FIELDS = ("assigned_to", "created_by")


@router.get("/", response_model=SuccessResponse[TaskList])
async def list_tasks(
    actor: Actor = Depends(require_permission("tasks:read")),
    service: TaskService = Depends(get_task_service),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    status_filter: TaskStatus | None = Query(None, alias="status"),
    priority: TaskPriority | None = Query(None),
):
    """List tasks by due date. Non-admins only see tasks assigned to them."""

    tasks, total = await service.list_tasks(
        actor,
        status=status_filter.value if status_filter else None,
        priority=priority.value if priority else None,
        page=page,
        limit=limit,
    )

    return SuccessResponse(
        data=TaskList(
            tasks=[TaskResponse.model_validate(t) for t in tasks],
            pagination=PaginationMeta.build(page, limit, total),
        )
    )


@router.post("/", response_model=SuccessResponse[TaskResponse], status_code=status.HTTP_201_CREATED)
async def create_task(
    task_create: TaskCreate,
    actor: Actor = Depends(require_permission("tasks:create")),
    service: TaskService = Depends(get_task_service),
):
    task = await service.create_task(actor, task_create)

    return SuccessResponse(
        message="Task created successfully",
        data=TaskResponse.model_validate(task),
    )


@router.get("/{task_id}", response_model=SuccessResponse[TaskResponse])
async def get_task(
    task_id: str,
    actor: Actor = Depends(require_permission("tasks:read")),
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(task_id)
    require_ownership(actor, task, TASK_OWNER_FIELDS)

    return SuccessResponse(data=TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=SuccessResponse[TaskResponse])
async def update_task(
    task_id: str,
    task_update: TaskUpdate,
    actor: Actor = Depends(require_permission("tasks:update")),
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(task_id)
    require_ownership(actor, task, TASK_OWNER_FIELDS)

    task = await service.update_task(actor, task, task_update)

    return SuccessResponse(
        message="Task updated successfully",
        data=TaskResponse.model_validate(task),
    )


@router.delete("/{task_id}", response_model=BaseResponse)
async def delete_task(
    task_id: str,
    actor: Actor = Depends(require_permission("tasks:delete")),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task. Only its creator (or an Admin) may do so."""

    task = await service.get_task(task_id)
    require_ownership(actor, task, "created_by")

    await service.delete_task(actor, task)

    return BaseResponse(message="Task deleted successfully")
