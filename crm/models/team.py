"""Team and team membership models."""

from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class TeamRole(str, Enum):
    """Role of a user inside a team."""

    MEMBER = "member"
    LEAD = "lead"
    MANAGER = "manager"


class Team(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Grouping of users with an optional manager and parent team."""

    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    manager_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL")
    )
    parent_team_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="SET NULL")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    manager: Mapped[Optional["User"]] = relationship("User", foreign_keys=[manager_id])
    parent_team: Mapped[Optional["Team"]] = relationship(
        "Team", remote_side="Team.id", back_populates="sub_teams"
    )
    sub_teams: Mapped[list["Team"]] = relationship("Team", back_populates="parent_team")
    memberships: Mapped[list["TeamMember"]] = relationship(
        "TeamMember",
        back_populates="team",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name='{self.name}')>"


class TeamMember(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Membership of a user in a team."""

    __tablename__ = "team_members"

    team_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(20), default=TeamRole.MEMBER.value, nullable=False)

    team: Mapped[Team] = relationship(Team, back_populates="memberships")
    user: Mapped["User"] = relationship("User", back_populates="team_memberships")

    __table_args__ = (UniqueConstraint("team_id", "user_id", name="unique_team_member"),)

    def __repr__(self) -> str:
        return f"<TeamMember(team_id={self.team_id}, user_id={self.user_id}, role='{self.role}')>"
