"""Report schemas."""

from pydantic import BaseModel, Field


class SummaryReport(BaseModel):
    """Dashboard summary figures, scoped to the caller's own records unless Admin."""

    deals_by_stage: dict[str, int] = Field(default_factory=dict)
    tasks_by_priority: dict[str, int] = Field(default_factory=dict)
    open_deals: int = 0
    won_revenue: float = 0.0
    contact_count: int = 0
