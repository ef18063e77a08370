"""Reporting routes."""

from fastapi import APIRouter, Depends

from crm.dependencies.auth import require_permission
from crm.dependencies.services import get_report_service
from crm.policies import Actor
from crm.schemas.common import SuccessResponse
from crm.schemas.report import SummaryReport
from crm.services.report_service import ReportService

router = APIRouter()


@router.get("/summary", response_model=SuccessResponse[SummaryReport])
async def get_summary(
    actor: Actor = Depends(require_permission("reports:read")),
    report_service: ReportService = Depends(get_report_service),
):
    """Pipeline and workload summary, scoped to the caller unless Admin."""

    report = await report_service.summary(actor)
    return SuccessResponse(data=report)
