"""Activity schemas."""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from .common import PaginationMeta, TimestampMixin, UserSummary


class ActivityCreate(BaseModel):
    """Schema for logging an activity."""

    type: str = Field(..., min_length=1, max_length=50, description="Activity type, e.g. call")
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    related_to_type: str | None = Field(None, max_length=50)
    related_to_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ActivityResponse(TimestampMixin):
    """Schema for activity response."""

    id: str
    type: str
    title: str
    description: str | None
    user_id: str
    related_to_type: str | None
    related_to_id: str | None
    # ORM attribute is ``meta``; ``metadata`` on the model is the table registry
    metadata: dict[str, Any] = Field(
        default_factory=dict, validation_alias=AliasChoices("meta", "metadata")
    )
    user: UserSummary | None = None

    class Config:
        from_attributes = True


class ActivityList(BaseModel):
    activities: list[ActivityResponse]
    pagination: PaginationMeta
