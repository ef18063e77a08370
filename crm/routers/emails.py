"""Email template and outbox routes."""

from fastapi import APIRouter, Depends, status

from crm.constants import APIStatus
from crm.dependencies.auth import require_permission
from crm.dependencies.services import get_email_service
from crm.policies import Actor
from crm.schemas.common import SuccessResponse
from crm.schemas.email import (
    EmailLogResponse,
    EmailSendRequest,
    EmailTemplateCreate,
    EmailTemplateResponse,
)
from crm.services.email_service import EmailService

router = APIRouter()


@router.get("/templates", response_model=SuccessResponse[list[EmailTemplateResponse]])
async def list_templates(
    actor: Actor = Depends(require_permission("emails:read")),
    email_service: EmailService = Depends(get_email_service),
):
    """Active templates only."""

    templates = await email_service.list_templates()
    return SuccessResponse(data=[EmailTemplateResponse.model_validate(t) for t in templates])


@router.post(
    "/templates",
    response_model=SuccessResponse[EmailTemplateResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_template(
    template_create: EmailTemplateCreate,
    actor: Actor = Depends(require_permission("emails:create")),
    email_service: EmailService = Depends(get_email_service),
):
    template = await email_service.create_template(actor, template_create)

    return SuccessResponse(
        message="Email template created successfully",
        data=EmailTemplateResponse.model_validate(template),
    )


@router.post(
    "/send",
    response_model=SuccessResponse[EmailLogResponse],
    status_code=APIStatus.ACCEPTED,
)
async def send_email(
    send_request: EmailSendRequest,
    actor: Actor = Depends(require_permission("emails:send")),
    email_service: EmailService = Depends(get_email_service),
):
    """Queue an email. Delivery happens outside the request."""

    email_log = await email_service.queue_email(actor, send_request)

    return SuccessResponse(
        message="Email queued for sending",
        data=EmailLogResponse.model_validate(email_log),
    )


@router.get("/logs", response_model=SuccessResponse[list[EmailLogResponse]])
async def list_email_logs(
    actor: Actor = Depends(require_permission("emails:read")),
    email_service: EmailService = Depends(get_email_service),
):
    logs = await email_service.list_logs()
    return SuccessResponse(data=[EmailLogResponse.model_validate(log) for log in logs])
