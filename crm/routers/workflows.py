"""Workflow automation routes."""

from fastapi import APIRouter, Depends, status

from crm.dependencies.auth import require_permission
from crm.dependencies.services import get_workflow_service
from crm.policies import Actor
from crm.schemas.common import SuccessResponse
from crm.schemas.workflow import WorkflowCreate, WorkflowResponse
from crm.services.workflow_service import WorkflowService

router = APIRouter()


@router.get("/", response_model=SuccessResponse[list[WorkflowResponse]])
async def list_workflows(
    actor: Actor = Depends(require_permission("workflows:read")),
    workflow_service: WorkflowService = Depends(get_workflow_service),
):
    workflows = await workflow_service.list_workflows()
    return SuccessResponse(data=[WorkflowResponse.model_validate(w) for w in workflows])


@router.post(
    "/", response_model=SuccessResponse[WorkflowResponse], status_code=status.HTTP_201_CREATED
)
async def create_workflow(
    workflow_create: WorkflowCreate,
    actor: Actor = Depends(require_permission("workflows:create")),
    workflow_service: WorkflowService = Depends(get_workflow_service),
):
    workflow = await workflow_service.create_workflow(actor, workflow_create)

    return SuccessResponse(
        message="Workflow created successfully",
        data=WorkflowResponse.model_validate(workflow),
    )


@router.patch("/{workflow_id}/activate", response_model=SuccessResponse[WorkflowResponse])
async def activate_workflow(
    workflow_id: str,
    actor: Actor = Depends(require_permission("workflows:update")),
    workflow_service: WorkflowService = Depends(get_workflow_service),
):
    workflow = await workflow_service.set_active(workflow_id, True)

    return SuccessResponse(
        message="Workflow activated successfully",
        data=WorkflowResponse.model_validate(workflow),
    )


@router.patch("/{workflow_id}/deactivate", response_model=SuccessResponse[WorkflowResponse])
async def deactivate_workflow(
    workflow_id: str,
    actor: Actor = Depends(require_permission("workflows:update")),
    workflow_service: WorkflowService = Depends(get_workflow_service),
):
    workflow = await workflow_service.set_active(workflow_id, False)

    return SuccessResponse(
        message="Workflow deactivated successfully",
        data=WorkflowResponse.model_validate(workflow),
    )
