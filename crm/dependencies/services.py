"""Service dependency injection."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crm.dependencies.database import get_db
from crm.services.activity_service import ActivityService
from crm.services.audit_service import AuditService
from crm.services.auth_service import AuthService
from crm.services.contact_service import ContactService
from crm.services.deal_service import DealService
from crm.services.email_service import EmailService
from crm.services.report_service import ReportService
from crm.services.role_service import RoleService
from crm.services.task_service import TaskService
from crm.services.team_service import TeamService
from crm.services.user_service import UserService
from crm.services.workflow_service import WorkflowService


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[AuthService, None]:
    """Get AuthService instance."""
    yield AuthService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[UserService, None]:
    """Get UserService instance."""
    yield UserService(db)


async def get_role_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[RoleService, None]:
    yield RoleService(db)


async def get_team_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[TeamService, None]:
    yield TeamService(db)


async def get_contact_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[ContactService, None]:
    yield ContactService(db)


async def get_deal_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[DealService, None]:
    yield DealService(db)


async def get_task_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[TaskService, None]:
    yield TaskService(db)


async def get_activity_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[ActivityService, None]:
    yield ActivityService(db)


async def get_workflow_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[WorkflowService, None]:
    yield WorkflowService(db)


async def get_email_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[EmailService, None]:
    yield EmailService(db)


async def get_audit_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[AuditService, None]:
    yield AuditService(db)


async def get_report_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[ReportService, None]:
    yield ReportService(db)
