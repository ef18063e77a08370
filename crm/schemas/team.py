"""Team schemas."""

from pydantic import AliasChoices, BaseModel, Field

from crm.models.team import TeamRole

from .common import TimestampMixin, UserSummary


class TeamMemberInput(BaseModel):
    user_id: str
    role: TeamRole = TeamRole.MEMBER.value

    class Config:
        use_enum_values = True


class TeamMemberResponse(BaseModel):
    """Schema for a team membership."""

    user_id: str
    role: str
    user: UserSummary

    class Config:
        from_attributes = True


class TeamCreate(BaseModel):
    """Schema for creating a team."""

    name: str = Field(..., min_length=1, max_length=255, description="Team name")
    description: str | None = Field(None, description="Team description")
    manager_id: str | None = Field(None, description="Team manager")
    parent_team_id: str | None = Field(None, description="Parent team for nested teams")
    members: list[TeamMemberInput] = Field(default_factory=list, description="Initial members")


class TeamMembersUpdate(BaseModel):
    """Schema for replacing the members of a team."""

    members: list[TeamMemberInput] = Field(..., description="Complete new member list")


class TeamResponse(TimestampMixin):
    """Schema for team response."""

    id: str
    name: str
    description: str | None
    manager_id: str | None
    parent_team_id: str | None
    is_active: bool
    manager: UserSummary | None = None
    members: list[TeamMemberResponse] = Field(
        default_factory=list, validation_alias=AliasChoices("memberships", "members")
    )

    class Config:
        from_attributes = True
