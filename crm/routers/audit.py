"""Audit trail routes."""

from fastapi import APIRouter, Depends, Query

from crm.constants.permissions import ADMIN_ROLE, AUDITOR_ROLE
from crm.dependencies.auth import require_role
from crm.dependencies.services import get_audit_service
from crm.policies import Actor
from crm.schemas.audit import AuditLogList, AuditLogResponse
from crm.schemas.common import PaginationMeta, SuccessResponse
from crm.services.audit_service import AuditService
from crm.utils.exceptions import NotFoundError

router = APIRouter()


@router.get("/logs", response_model=SuccessResponse[AuditLogList])
async def list_audit_logs(
    actor: Actor = Depends(require_role(ADMIN_ROLE, AUDITOR_ROLE)),
    audit_service: AuditService = Depends(get_audit_service),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(50, ge=1, le=100, description="Items per page"),
    user_id: str | None = Query(None, description="Acting user"),
    action: str | None = Query(None, description="create, update or delete"),
    resource_type: str | None = Query(None, description="Resource collection"),
):
    """Audit entries, newest first."""

    logs, total = await audit_service.list_logs(
        user_id=user_id,
        action=action,
        resource_type=resource_type,
        page=page,
        limit=limit,
    )

    return SuccessResponse(
        data=AuditLogList(
            logs=[AuditLogResponse.model_validate(log) for log in logs],
            pagination=PaginationMeta.build(page, limit, total),
        )
    )


@router.get("/logs/{log_id}", response_model=SuccessResponse[AuditLogResponse])
async def get_audit_log(
    log_id: str,
    actor: Actor = Depends(require_role(ADMIN_ROLE, AUDITOR_ROLE)),
    audit_service: AuditService = Depends(get_audit_service),
):
    log = await audit_service.get_log(log_id)
    if not log:
        raise NotFoundError("Audit log not found")

    return SuccessResponse(data=AuditLogResponse.model_validate(log))
